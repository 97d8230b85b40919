"""Tests for the cavegen command line and logging setup."""

import io
import logging

import pytest

from cave_engine import CaveGrid, generate_cave
from cave_logging import ROOT_LOGGER, setup_logging
from cavegen import build_parser, config_from_args, format_grid, main


class TestFormatGrid:
    """Tests for the text dump."""

    def test_default_chars(self):
        """Walls print as '#', open cells as '.'."""
        grid = CaveGrid.from_rows([[1, 0, 1], [0, 0, 1]])
        assert format_grid(grid) == "#.#\n..#"

    def test_custom_chars(self):
        """Characters are configurable."""
        grid = CaveGrid.from_rows([[1, 0]])
        assert format_grid(grid, wall_char="X", open_char=" ") == "X "


class TestConfigFromArgs:
    """Tests for argument mapping."""

    def test_size_overrides_width_height(self):
        """--size sets a square grid."""
        args = build_parser().parse_args(["--width", "10", "--height", "12", "--size", "7"])
        cfg = config_from_args(args)
        assert (cfg.width, cfg.height) == (7, 7)

    def test_all_parameters(self):
        """Every flag lands in the config."""
        args = build_parser().parse_args([
            "--width", "9", "--height", "4", "--density", "30",
            "--threshold", "6", "--iterations", "2", "--seed", "8",
        ])
        cfg = config_from_args(args)
        assert (cfg.width, cfg.height) == (9, 4)
        assert cfg.wall_density == 30
        assert cfg.neighbor_threshold == 6
        assert cfg.iterations == 2
        assert cfg.seed == 8


class TestMain:
    """Tests for the main entry point."""

    def test_prints_grid(self):
        """Output is one line per row, matching the library result."""
        out = io.StringIO()
        rc = main(["--size", "6", "--seed", "17", "--iterations", "3"], out=out)
        assert rc == 0
        lines = out.getvalue().splitlines()
        assert len(lines) == 6
        assert all(len(line) == 6 and set(line) <= {"#", "."} for line in lines)
        expected = generate_cave(6, 6, 45, 5, 3, seed=17)
        assert out.getvalue() == format_grid(expected) + "\n"

    @pytest.mark.parametrize("argv", [
        ["--density", "150"],
        ["--size", "0"],
        ["--iterations", "-1"],
        ["--wall-char", "##"],
    ])
    def test_invalid_arguments_exit(self, argv):
        """Bad parameters are reported as usage errors."""
        with pytest.raises(SystemExit) as exc:
            main(argv, out=io.StringIO())
        assert exc.value.code == 2


class TestLogging:
    """Tests for cave_logging.setup_logging."""

    def test_debug_generation_messages(self):
        """Engine logs generation start and finish at DEBUG."""
        stream = io.StringIO()
        setup_logging(logging.DEBUG, stream=stream)
        generate_cave(5, 5, 45, 5, 2, seed=3)
        text = stream.getvalue()
        assert "generating 5x5 cave" in text
        assert "cave done" in text

    def test_reinitialization_keeps_one_handler(self):
        """Calling setup twice does not stack handlers."""
        setup_logging(logging.INFO, stream=io.StringIO())
        logger = setup_logging(logging.INFO, stream=io.StringIO())
        assert logger.name == ROOT_LOGGER
        assert len(logger.handlers) == 1
