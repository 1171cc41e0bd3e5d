"""Tests for the command-line entry point."""
import json
import logging
import threading
import time

import pytest

from main import build_parser, demo_layout, main
from piperoute.application.services import OptimizationService
from piperoute.domain.models import Grid, GridCoordinate, PipeSolution


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging replaces root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.json"
    path.write_text(json.dumps({
        "rows": 10, "columns": 10, "source": [5, 5], "consumers": [[5, 8]]
    }), encoding="utf-8")
    return path


@pytest.fixture
def config_args(tmp_path):
    return ["--config", str(tmp_path / "missing-config.json"), "--log-level", "WARNING"]


class TestOptimizeCommand:
    """``piperoute optimize``"""
    
    def test_text_output(self, request_file, config_args, capsys):
        assert main(["optimize", str(request_file)] + config_args) == 0
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[5] == ".....S--C."
        assert lines[0] == ".........."
        assert "Length:     3" in out
        assert "Junctions:  0" in out
        assert "Connected:  yes" in out
    
    def test_json_output(self, request_file, config_args, capsys):
        assert main(["optimize", str(request_file), "--json"] + config_args) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["metrics"] == {"total_length": 3, "junction_count": 0}
    
    def test_output_file(self, request_file, config_args, tmp_path, capsys):
        output = tmp_path / "solution.json"
        assert main(["optimize", str(request_file), "-o", str(output)] + config_args) == 0
        assert json.loads(output.read_text(encoding="utf-8"))["metrics"]["total_length"] == 3
    
    def test_missing_request(self, tmp_path, config_args):
        assert main(["optimize", str(tmp_path / "absent.json")] + config_args) == 1
    
    def test_invalid_request(self, tmp_path, config_args):
        path = tmp_path / "request.json"
        path.write_text(json.dumps({"rows": 10, "columns": 10, "source": [20, 20]}),
                        encoding="utf-8")
        assert main(["optimize", str(path)] + config_args) == 1
    
    def test_negative_penalty(self, request_file, config_args):
        assert main(["optimize", str(request_file), "--penalty", "-1"] + config_args) == 1
    
    def test_timeout_returns_without_waiting(self, request_file, config_args, monkeypatch):
        release = threading.Event()
        
        def _stalled(configuration, grid, source, consumers):
            release.wait(5)
            return PipeSolution.empty()
        
        monkeypatch.setattr(OptimizationService, "_run", staticmethod(_stalled))
        try:
            begin = time.monotonic()
            assert main(["optimize", str(request_file), "--timeout", "0.05"] + config_args) == 1
            assert time.monotonic() - begin < 2.0
        finally:
            release.set()
    
    @pytest.mark.parametrize("content", [
        {"logging": {"level": "LOUD"}},
        {"optimizer": {"seed": "abc"}},
        {"optimizer": {"junction_penalty": -1}},
        {"grid": {"rows": 0}},
    ])
    def test_invalid_config_file(self, request_file, tmp_path, content):
        config = tmp_path / "config.json"
        config.write_text(json.dumps(content), encoding="utf-8")
        assert main(["optimize", str(request_file), "--config", str(config)]) == 1
        assert main(["demo", "--config", str(config)]) == 1
    
    def test_config_file_penalty(self, tmp_path, capsys):
        request = tmp_path / "request.json"
        request.write_text(json.dumps({
            "rows": 10, "columns": 10, "source": [5, 0], "consumers": [[5, 6], [2, 4]]
        }), encoding="utf-8")
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"optimizer": {"junction_penalty": 0.0}}), encoding="utf-8")
        
        args = ["optimize", str(request), "--json", "--config", str(config), "--log-level", "WARNING"]
        assert main(args) == 0
        assert json.loads(capsys.readouterr().out)["junctions"] == [[5, 4]]
        
        assert main(args + ["--penalty", "10"]) == 0
        assert json.loads(capsys.readouterr().out)["junctions"] == []


class TestDemoCommand:
    """``piperoute demo``"""
    
    def test_demo(self, config_args, capsys):
        assert main(["demo"] + config_args) == 0
        out = capsys.readouterr().out
        assert "Junctions:" in out
        assert "Connected:  yes" in out
    
    def test_demo_layout(self):
        grid = Grid(20, 30)
        source, consumers = demo_layout(grid)
        assert source == GridCoordinate(10, 15)
        assert len(consumers) == 6
        assert all(grid.contains(c) for c in consumers)
    
    def test_demo_layout_tiny_grid(self):
        grid = Grid(1, 1)
        source, consumers = demo_layout(grid)
        assert source == GridCoordinate(0, 0)
        assert consumers == frozenset()


class TestParser:
    """Argument parsing."""
    
    def test_hex_seed(self):
        args = build_parser().parse_args(["demo", "--seed", "0xC0FFEE"])
        assert args.seed == 0xC0FFEE
    
    def test_no_mode_prints_help(self, capsys):
        assert main([]) == 0
        assert "optimize" in capsys.readouterr().out
