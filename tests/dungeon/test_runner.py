"""Tests for the command-line runner."""

import unittest
from unittest.mock import patch

import pytest

from core.types import TileKind
from dungeon.generation import GenerationError, MapGenerator
from dungeon.runner import GLYPHS, build_parser, main, render_ascii

MAP_CHARS = set(GLYPHS.values())


class TestRenderAscii(unittest.TestCase):
    """Test the ASCII dump."""

    def test_blank_grid_is_all_stone(self) -> None:
        """Test an unstarted generator renders as stone."""
        generator = MapGenerator.create(6, 3, 1, 0)

        assert render_ascii(generator) == "######\n######\n######"

    def test_glyphs_match_tiles(self) -> None:
        """Test every glyph matches the tile at its position."""
        generator = MapGenerator.create(21, 15, 3, 30)
        generator.run_to_completion()

        lines = render_ascii(generator).split("\n")
        assert len(lines) == 15
        for y, line in enumerate(lines):
            assert len(line) == 21
            for x, glyph in enumerate(line):
                assert glyph == GLYPHS[generator.tile_at(x, y)]

    def test_glyphs_are_distinct(self) -> None:
        """Test each tile kind has its own glyph."""
        assert set(GLYPHS) == set(TileKind)
        assert len(MAP_CHARS) == len(TileKind)


class TestMain:
    """Test the entry point."""

    def test_defaults(self) -> None:
        """Test parser defaults."""
        args = build_parser().parse_args([])

        assert args.lenient is False
        assert args.no_map is False
        assert args.log_level == "INFO"

    def test_prints_map(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a full run prints one map line per row."""
        main(["--width", "21", "--height", "11", "--seed", "5", "--room-attempts", "20"])

        out = capsys.readouterr().out
        map_lines = [line for line in out.splitlines() if line and set(line) <= MAP_CHARS]
        assert len(map_lines) == 11
        assert all(len(line) == 21 for line in map_lines)

    def test_no_map(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the map can be suppressed."""
        main(["--width", "15", "--height", "15", "--no-map", "--log-level", "WARNING"])

        out = capsys.readouterr().out
        assert not any(line and set(line) <= MAP_CHARS for line in out.splitlines())

    def test_invalid_params_exit_with_usage_error(self) -> None:
        """Test validation errors are reported through argparse."""
        with pytest.raises(SystemExit) as exc_info:
            main(["--width", "0"])

        assert exc_info.value.code == 2

    def test_generation_error_exits_with_failure(self) -> None:
        """Test a failed generation exits with status 1."""
        with patch.object(
            MapGenerator, "run_to_completion", side_effect=GenerationError("unjoinable")
        ):
            with pytest.raises(SystemExit) as exc_info:
                main(["--width", "11", "--height", "11", "--no-map"])

        assert exc_info.value.code == 1
