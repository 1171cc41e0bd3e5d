"""Test configuration and fixtures for PipeRoute."""
import pytest

from piperoute.algorithms.steiner import OptimizerConfiguration, PipeOptimizer
from piperoute.domain.models import Grid
from piperoute.domain.services import TieBreaker


@pytest.fixture
def grid10():
    """10x10 grid used by most scenarios."""
    return Grid(10, 10)


@pytest.fixture
def tie_breaker():
    return TieBreaker(0xD15EA5E5)


@pytest.fixture
def optimizer_factory():
    """Build an optimizer for a given penalty and seed."""
    def _create(junction_penalty=1.25, seed=0xD15EA5E5):
        return PipeOptimizer(OptimizerConfiguration(junction_penalty=junction_penalty, seed=seed))
    return _create


@pytest.fixture
def check_solution():
    """Assert the structural properties every solution must have."""
    def _check(grid, source, consumers, solution):
        consumers = set(consumers) - {source}
        
        assert solution.is_fully_connected(source, consumers)
        
        for edge in solution.pipe_edges:
            assert edge.is_adjacent, f"non-adjacent edge {edge}"
            assert grid.contains(edge.a) and grid.contains(edge.b)
        
        assert solution.metrics.total_length == len(solution.pipe_edges)
        
        degree = {}
        for edge in solution.pipe_edges:
            degree[edge.a] = degree.get(edge.a, 0) + 1
            degree[edge.b] = degree.get(edge.b, 0) + 1
        
        assert set(degree) == set(solution.connection_map)
        for coordinate, directions in solution.connection_map.items():
            assert len(directions) == degree[coordinate]
        
        expected_junctions = {c for c, d in degree.items() if d > 2}
        assert solution.junctions == expected_junctions
        assert solution.metrics.junction_count == len(expected_junctions)
        
        assert solution.pipe_cells == set(degree) - consumers - {source}
        
        if consumers:
            # Attachment paths never cross the existing network, so the result is a tree
            assert len(solution.pipe_edges) == len(solution.connection_map) - 1
            assert source in solution.connection_map
            assert consumers <= set(solution.connection_map)
    return _check
