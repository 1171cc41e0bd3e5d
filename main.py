#!/usr/bin/env python3
"""
PipeRoute - Main Entry Point
Junction-aware rectilinear pipe network optimizer
"""

import sys
import json
import logging
import argparse
from typing import List, Optional

from piperoute.shared.configuration import initialize_config, ConfigManager
from piperoute.shared.exceptions import PipeRouteException
from piperoute.shared.utils.logging_utils import setup_logging
from piperoute.domain.models import Grid, GridCoordinate
from piperoute.application.services import OptimizationService
from piperoute.infrastructure.serialization import (
    load_request, solution_to_dict, export_solution
)
from piperoute.presentation import render_text

def demo_layout(grid: Grid):
    """Source at the centre, consumers near the corners and edge midpoints."""
    last_row, last_column = grid.rows - 2, grid.columns - 2
    source = GridCoordinate(grid.rows // 2, grid.columns // 2)
    candidates = {
        GridCoordinate(1, 1), GridCoordinate(1, last_column),
        GridCoordinate(last_row, 1), GridCoordinate(last_row, last_column),
        GridCoordinate(grid.rows // 2, 1), GridCoordinate(1, grid.columns // 2),
    }
    consumers = frozenset(c for c in candidates if grid.contains(c)) - {source}
    return source, consumers


def setup_environment(config_path: Optional[str] = None,
                      log_level: Optional[str] = None) -> ConfigManager:
    """Load configuration and configure logging."""
    config = initialize_config(config_path)
    if log_level:
        config.update_logging_settings(level=log_level)
    setup_logging(config.get_settings().logging)
    return config


def _apply_overrides(config: ConfigManager, args) -> None:
    overrides = {}
    if getattr(args, "seed", None) is not None:
        overrides["seed"] = args.seed
    if getattr(args, "timeout", None) is not None:
        overrides["timeout_seconds"] = args.timeout
    if overrides:
        config.update_optimizer_settings(**overrides)


def _report(grid: Grid, source: GridCoordinate, consumers, solution,
            as_json: bool, output: Optional[str]) -> None:
    if output:
        export_solution(solution, output)
        logging.info(f"Solution written to: {output}")
    
    if as_json:
        print(json.dumps(solution_to_dict(solution), indent=2))
        return
    
    print(render_text(grid, source, consumers, solution))
    print("")
    print(f"Consumers:  {len(set(consumers) - {source})}")
    print(f"Length:     {solution.metrics.total_length}")
    print(f"Junctions:  {solution.metrics.junction_count}")
    print(f"Connected:  {'yes' if solution.is_fully_connected(source, consumers) else 'no'}")


def _run(config: ConfigManager, grid: Grid, source: GridCoordinate, consumers, args) -> int:
    settings = config.get_settings().optimizer
    with OptimizationService(settings) as service:
        solution = service.optimize(grid, source, consumers, junction_penalty=args.penalty)
    _report(grid, source, consumers, solution, args.json, args.output)
    return 0


def run_optimize(args) -> int:
    """Optimize the layout described by a request file."""
    try:
        config = setup_environment(args.config, args.log_level)
        _apply_overrides(config, args)
        
        logging.info(f"Loading request from: {args.request}")
        grid, source, consumers = load_request(args.request)
        return _run(config, grid, source, consumers, args)
    
    except (PipeRouteException, OSError) as e:
        logging.error(f"Optimization failed: {e}")
        return 1


def run_demo(args) -> int:
    """Optimize the built-in demo layout."""
    try:
        config = setup_environment(args.config, args.log_level)
        _apply_overrides(config, args)
        
        grid_settings = config.get_settings().grid
        grid = Grid(grid_settings.rows, grid_settings.columns)
        source, consumers = demo_layout(grid)
        return _run(config, grid, source, consumers, args)
    
    except PipeRouteException as e:
        logging.error(f"Demo failed: {e}")
        return 1


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('--penalty', type=float, default=None,
                        help='Junction penalty (default from config)')
    parser.add_argument('--seed', type=lambda value: int(value, 0), default=None,
                        help='Tie-breaking seed, decimal or 0x-prefixed hex')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Seconds to wait for the result')
    parser.add_argument('--config', default=None, help='Path to configuration JSON')
    parser.add_argument('--json', action='store_true', help='Print the solution as JSON')
    parser.add_argument('-o', '--output', default=None, help='Also write the solution JSON here')
    parser.add_argument('--log-level', default=None,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Override the configured log level')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="piperoute",
        description="PipeRoute - junction-aware pipe network optimizer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s demo                           # Optimize the built-in layout
  %(prog)s optimize layout.json           # Optimize a request file
  %(prog)s optimize layout.json --json    # Print the solution document
  %(prog)s optimize layout.json --penalty 10 --seed 0xC0FFEE
        """
    )
    subparsers = parser.add_subparsers(dest='mode', help='Operation mode')
    
    optimize_parser = subparsers.add_parser('optimize', help='Optimize a request file')
    optimize_parser.add_argument('request', help='Request JSON with rows, columns, source, consumers')
    _add_common_arguments(optimize_parser)
    optimize_parser.set_defaults(handler=run_optimize)
    
    demo_parser = subparsers.add_parser('demo', help='Optimize a built-in layout')
    _add_common_arguments(demo_parser)
    demo_parser.set_defaults(handler=run_demo)
    
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    
    if not getattr(args, 'handler', None):
        parser.print_help()
        return 0
    
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
