"""Palette normalization and colour math."""

import re
from typing import Iterable, Optional, Tuple

FALLBACK_PALETTE = ("#38BDF8", "#FACC15", "#F472B6", "#A855F7")
MIN_PALETTE_SIZE = 3

_HEX_COLOR = re.compile(r"^#?([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})$")


def sanitize_hex(value: Optional[str]) -> Optional[str]:
    """Return ``#RRGGBB``/``#RGB`` uppercased, or None if the value is not a hex colour."""
    if not value:
        return None
    cleaned = value.strip()
    if not _HEX_COLOR.match(cleaned):
        return None
    cleaned = cleaned.upper()
    return cleaned if cleaned.startswith("#") else f"#{cleaned}"


def normalize_palette(colors: Iterable[Optional[str]]) -> Tuple[str, ...]:
    """
    Validate a user palette. Invalid entries are dropped; if fewer than three
    valid colours remain the whole input is replaced by FALLBACK_PALETTE
    (valid leftovers are not blended with the fallback).
    """
    sanitized = tuple(
        color for color in (sanitize_hex(c) for c in (colors or ())) if color
    )
    if len(sanitized) >= MIN_PALETTE_SIZE:
        return sanitized
    return FALLBACK_PALETTE


def hex_to_rgb(value: str) -> Tuple[int, int, int]:
    digits = value.lstrip("#")
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    number = int(digits, 16)
    return (number >> 16) & 255, (number >> 8) & 255, number & 255


def tint(value: str, delta: float) -> Tuple[int, int, int]:
    """Lighten (delta > 0) toward white or darken (delta < 0) toward black by ``|delta|``."""
    amount = max(-1.0, min(1.0, delta))
    target = 255 if amount > 0 else 0
    return tuple(
        int(round(channel + (target - channel) * abs(amount)))
        for channel in hex_to_rgb(value)
    )
