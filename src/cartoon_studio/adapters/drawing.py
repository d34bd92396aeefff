"""Pillow drawing helpers shared by the compositor layers."""

import logging
import threading
from typing import List, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from cartoon_studio import config

logger = logging.getLogger(__name__)

_font_cache = threading.local()

RGB = Tuple[int, int, int]
RGBA = Tuple[int, int, int, int]

# Tried in order after the configured font; Pillow also searches the system font dirs by file name
BOLD_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
    "/System/Library/Fonts/Supplemental/Arial Bold.ttf",
    "/Library/Fonts/Arial Bold.ttf",
    "C:/Windows/Fonts/arialbd.ttf",
)
REGULAR_FONT_CANDIDATES = (
    "DejaVuSans.ttf",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
    "/System/Library/Fonts/Supplemental/Arial.ttf",
    "/Library/Fonts/Arial.ttf",
    "C:/Windows/Fonts/arial.ttf",
)


def with_alpha(color: Sequence[int], alpha: float) -> RGBA:
    """Attach an opacity in [0, 1] to an RGB triple."""
    return (color[0], color[1], color[2], int(alpha * 255 + 0.5))


def load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont:
    """
    Load a TrueType font at ``size`` px, falling back to Pillow's bundled font.
    Cached per thread: FreeType faces must not be shared between render workers.
    """
    cache = getattr(_font_cache, "fonts", None)
    if cache is None:
        cache = _font_cache.fonts = {}
    key = (size, bold)
    if key not in cache:
        cache[key] = _open_font(size, bold)
    return cache[key]


def _open_font(size: int, bold: bool) -> ImageFont.FreeTypeFont:
    configured = config.FONT_BOLD if bold else config.FONT_REGULAR
    candidates = BOLD_FONT_CANDIDATES if bold else REGULAR_FONT_CANDIDATES
    for path in ((configured,) if configured else ()) + candidates:
        try:
            return ImageFont.truetype(path, size)
        except OSError:
            continue
    logger.warning("No TrueType font found, using Pillow default font at %dpx", size)
    return ImageFont.load_default(size=size)


def wrap_text(draw: ImageDraw.ImageDraw, text: str, font, max_width: float) -> List[str]:
    """
    Greedy word wrap: keep adding words while the rendered line fits in
    ``max_width``; otherwise start a new line with the overflowing word.
    A single word wider than the limit gets a line of its own.
    """
    lines = []
    current = ""
    for word in text.split():
        tentative = f"{current} {word}" if current else word
        if draw.textlength(tentative, font=font) <= max_width:
            current = tentative
        else:
            if current:
                lines.append(current)
            current = word
    if current:
        lines.append(current)
    return lines


def linear_gradient(width: int, height: int, start: RGB, end: RGB) -> Image.Image:
    """Diagonal gradient from the top-left corner (start) to the bottom-right corner (end)."""
    xs = np.arange(width, dtype=np.float64)[None, :]
    ys = np.arange(height, dtype=np.float64)[:, None]
    # Projection of each pixel onto the (0,0)->(width,height) axis
    t = np.clip((xs * width + ys * height) / float(width * width + height * height), 0.0, 1.0)
    start_arr = np.asarray(start, dtype=np.float64)
    end_arr = np.asarray(end, dtype=np.float64)
    pixels = start_arr + (end_arr - start_arr) * t[..., None]
    return Image.fromarray(np.rint(pixels).astype(np.uint8)).convert("RGBA")


def quadratic_curve(
    start: Tuple[float, float],
    control: Tuple[float, float],
    end: Tuple[float, float],
    steps: int = 24,
) -> List[Tuple[float, float]]:
    """Sample a quadratic Bezier curve into a polyline."""
    points = []
    for i in range(steps + 1):
        t = i / steps
        u = 1.0 - t
        x = u * u * start[0] + 2 * u * t * control[0] + t * t * end[0]
        y = u * u * start[1] + 2 * u * t * control[1] + t * t * end[1]
        points.append((x, y))
    return points


def transparent_layer(width: int, height: int) -> Image.Image:
    return Image.new("RGBA", (width, height), (0, 0, 0, 0))
