"""Tests for palette normalization and colour math."""

import pytest

from cartoon_studio.domain.palette import (
    FALLBACK_PALETTE,
    hex_to_rgb,
    normalize_palette,
    sanitize_hex,
    tint,
)


class TestNormalizePalette:
    def test_one_valid_entry_gives_fallback(self):
        assert normalize_palette(["red", "#xyz", "#38bdf8"]) == FALLBACK_PALETTE

    @pytest.mark.parametrize(
        "colors",
        [[], ["nope"], ["#123"], ["#123", "456789"], ["#123", "bad", "#GGGGGG"]],
    )
    def test_fewer_than_three_valid_gives_fallback(self, colors):
        assert normalize_palette(colors) == FALLBACK_PALETTE

    def test_valid_entries_are_uppercased_and_prefixed(self):
        assert normalize_palette(["38bdf8", "#abc", " #FfFfFf "]) == ("#38BDF8", "#ABC", "#FFFFFF")

    def test_invalid_entries_are_dropped_not_replaced(self):
        assert normalize_palette(["#111", "oops", "#222", None, "#333"]) == ("#111", "#222", "#333")

    def test_four_and_five_digit_hex_rejected(self):
        assert sanitize_hex("#abcd") is None
        assert sanitize_hex("abcde") is None

    def test_idempotent(self):
        once = normalize_palette(["a1b2c3", "#fff", "#123456", "zzz"])
        assert normalize_palette(once) == once
        assert normalize_palette(FALLBACK_PALETTE) == FALLBACK_PALETTE


class TestColourMath:
    def test_short_hex_expands(self):
        assert hex_to_rgb("#ABC") == (0xAA, 0xBB, 0xCC)

    def test_long_hex(self):
        assert hex_to_rgb("#38BDF8") == (0x38, 0xBD, 0xF8)

    def test_tint_lightens_toward_white(self):
        assert tint("#808080", 0.25) == (160, 160, 160)

    def test_tint_darkens_toward_black(self):
        assert tint("#808080", -0.25) == (96, 96, 96)

    def test_tint_stays_in_range(self):
        assert tint("#FFFFFF", 0.5) == (255, 255, 255)
        assert tint("#000000", -0.5) == (0, 0, 0)
