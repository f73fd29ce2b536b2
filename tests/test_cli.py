"""Tests for the grid-snake CLI."""

import json

from grid_snake.cli import _build_parser, main


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.config is None
        assert args.games == 10
        assert args.seed == 42
        assert not args.render

    def test_init_config_flags(self):
        args = _build_parser().parse_args([
            "init-config", "out.json", "--grid-width", "30", "--min-speed", "40",
        ])
        assert args.path == "out.json"
        assert args.grid_width == 30
        assert args.min_speed == 40
        assert args.grid_height is None


class TestCLICommands:
    def test_init_then_check(self, tmp_path, capsys):
        path = tmp_path / "config.json"
        assert main(["init-config", str(path), "--grid-width", "25"]) == 0
        assert json.loads(path.read_text())["grid_width"] == 25
        assert main(["check-config", str(path)]) == 0
        assert "25x20 grid" in capsys.readouterr().out

    def test_init_applies_every_override(self, tmp_path):
        path = tmp_path / "config.json"
        assert main([
            "init-config", str(path),
            "--grid-width", "30", "--grid-height", "12",
            "--initial-speed", "300", "--speed-increment", "25",
            "--min-speed", "40", "--food-value", "7",
        ]) == 0
        data = json.loads(path.read_text())
        assert data["grid_width"] == 30
        assert data["grid_height"] == 12
        assert data["initial_speed"] == 300
        assert data["speed_increment"] == 25
        assert data["min_speed"] == 40
        assert data["food_value"] == 7
        assert data["foods_per_level"] == 5

    def test_init_invalid_values(self, tmp_path):
        assert main(["init-config", str(tmp_path / "c.json"), "--grid-width", "5"]) == 2

    def test_check_missing_file(self, tmp_path):
        assert main(["check-config", str(tmp_path / "nope.json")]) == 2

    def test_simulate(self, capsys):
        assert main(["simulate", "--games", "2", "--max-ticks", "100", "--render"]) == 0
        out = capsys.readouterr().out
        assert "Simulation: 2 games" in out
        assert "score" in out
