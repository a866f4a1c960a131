"""Tests for breakpoint parsing and converter configuration."""

import pytest

from cascadewind.config import (
    DEFAULT_BREAKPOINTS,
    Breakpoint,
    ConverterConfig,
    order_breakpoints,
    parse_breakpoint,
)


class TestParseBreakpoint:
    def test_explicit_min_width(self):
        bp = parse_breakpoint("tablet=900x700@700")
        assert bp == Breakpoint("tablet", 900, 700, 700)
        assert bp.qualifier == "tablet"
        assert bp.viewport == {"width": 900, "height": 700}

    def test_tailwind_screen_default(self):
        assert parse_breakpoint("md=800x600").min_width == 768
        assert parse_breakpoint("2xl=1600x900").min_width == 1536

    def test_unknown_name_defaults_to_width(self):
        assert parse_breakpoint("wide=1920x1080").min_width == 1920

    def test_default_breakpoint(self):
        bp = parse_breakpoint("default=1024x768")
        assert bp.is_default
        assert bp.qualifier == ""
        assert bp.sort_key == 0

    @pytest.mark.parametrize("raw", ["md", "md=800", "md=axb", "=800x600", "md 800x600"])
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_breakpoint(raw)


class TestOrdering:
    def test_ascending_min_width_default_first(self):
        lg = parse_breakpoint("lg=1100x800")
        sm = parse_breakpoint("sm=700x800")
        default = parse_breakpoint("default=1280x800")
        assert order_breakpoints([lg, default, sm]) == [default, sm, lg]

    def test_stable_for_equal_thresholds(self):
        a = Breakpoint("a", 800, 600, 700)
        b = Breakpoint("b", 900, 600, 700)
        assert order_breakpoints([b, a]) == [b, a]


class TestConverterConfig:
    def test_defaults(self):
        config = ConverterConfig()
        assert config.breakpoints == DEFAULT_BREAKPOINTS
        assert config.headless is True
        assert config.strip_identities is False

    def test_duplicate_names_rejected(self):
        bp = parse_breakpoint("md=800x600")
        with pytest.raises(ValueError):
            ConverterConfig(breakpoints=(bp, bp))

    def test_empty_breakpoints_rejected(self):
        with pytest.raises(ValueError):
            ConverterConfig(breakpoints=())
