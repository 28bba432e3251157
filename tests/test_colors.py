"""Tests for the color codec."""

import pytest

from brand_engine.colors import (
    DARKEN_FALLBACK,
    DEFAULT_COLOR,
    NAMED_COLORS,
    blend,
    darken,
    hex_to_rgb,
    is_canonical,
    normalize,
)


class TestNormalizeHex:
    def test_passes_through_six_digit_hex(self):
        assert normalize("#FF6600") == "#FF6600"

    def test_expands_shorthand(self):
        assert normalize("#abc") == "#aabbcc"

    def test_strips_alpha_from_eight_digit_hex(self):
        assert normalize("#FF6600AA") == "#FF6600"

    def test_strips_alpha_from_four_digit_shorthand(self):
        assert normalize("#abcd") == "#aabbcc"

    def test_trims_whitespace(self):
        assert normalize("  #123456 ") == "#123456"

    @pytest.mark.parametrize("value", ["#12345", "#zzzzzz", "#", "#1234567"])
    def test_malformed_hex_returns_default(self, value):
        assert normalize(value) == DEFAULT_COLOR


class TestNormalizeFunctions:
    def test_rgb(self):
        assert normalize("rgb(255, 102, 0)") == "#ff6600"
        assert normalize("rgb(0, 0, 0)") == "#000000"
        assert normalize("rgb(255, 255, 255)") == "#ffffff"

    def test_rgba_ignores_alpha(self):
        assert normalize("rgba(255, 102, 0, 0.5)") == "#ff6600"

    def test_rgb_space_separated(self):
        assert normalize("rgb(10 20 30)") == "#0a141e"

    def test_rgb_out_of_range_is_clamped(self):
        assert normalize("rgb(300, 0, 0)") == "#ff0000"

    def test_hsl_primaries(self):
        assert normalize("hsl(0,100%,50%)") == "#ff0000"
        assert normalize("hsl(120,100%,50%)") == "#00ff00"
        assert normalize("hsl(240,100%,50%)") == "#0000ff"

    def test_hsl_grey(self):
        assert normalize("hsl(0, 0%, 50%)") == "#808080"

    def test_hsla_ignores_alpha(self):
        assert normalize("hsla(0, 100%, 50%, 0.5)") == "#ff0000"

    def test_hsl_hue_wraps(self):
        assert normalize("hsl(360, 100%, 50%)") == normalize("hsl(0, 100%, 50%)")


class TestNormalizeNamed:
    def test_named_colors(self):
        assert normalize("rebeccapurple") == "#663399"
        assert normalize("coral") == "#FF7F50"
        assert normalize("white") == "#FFFFFF"
        assert normalize("black") == "#000000"
        assert normalize("dodgerblue") == "#1E90FF"

    def test_named_colors_case_insensitive(self):
        assert normalize("DodgerBlue") == "#1E90FF"

    def test_table_size(self):
        assert len(NAMED_COLORS) == 35


class TestNormalizeUnsupported:
    @pytest.mark.parametrize(
        "value",
        ["oklch(0.7 0.15 200)", "lab(50% 40 60)", "not-a-color", "", None, 42, "   "],
    )
    def test_returns_default(self, value):
        assert normalize(value) == DEFAULT_COLOR


@pytest.mark.parametrize(
    "value",
    ["#abc", "#FF6600AA", "rgb(10, 20, 30)", "hsl(200, 50%, 40%)", "teal", "garbage"],
)
def test_normalize_is_idempotent(value):
    once = normalize(value)
    assert normalize(once) == once
    assert is_canonical(once)


class TestDarken:
    def test_half(self):
        assert darken("#FF6600", 0.5) == "#803300"

    def test_zero_is_black(self):
        assert darken("#FF6600", 0) == "#000000"

    def test_one_is_identity(self):
        assert darken("#FF6600", 1) == "#ff6600"

    def test_default_primary_gives_default_secondary(self):
        assert darken(DEFAULT_COLOR, 0.6).upper() == DARKEN_FALLBACK

    @pytest.mark.parametrize("value", ["not-hex", "#abc", "", None, "#gggggg"])
    def test_invalid_returns_darken_fallback(self, value):
        assert darken(value, 0.5) == DARKEN_FALLBACK

    def test_sentinels_are_distinct(self):
        assert DEFAULT_COLOR != DARKEN_FALLBACK


def test_hex_to_rgb():
    assert hex_to_rgb("#0a141e") == (10, 20, 30)
    assert hex_to_rgb("0a141e") is None


def test_blend_towards_white():
    assert blend("#000000", "#ffffff", 0.5) == "#808080"
    assert blend("#0066ff", "#ffffff", 0) == "#0066ff"
