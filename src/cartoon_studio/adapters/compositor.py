"""
IFrameCompositor adapter built on Pillow.

A frame is an ordered stack of layers. Each layer is a plain function of the
same immutable FrameContext and returns a full-canvas RGBA overlay, so every
layer can be rendered and tested on its own. The compositor alpha-blends the
overlays back to front:

  background -> character -> title -> caption -> HUD
"""

import io
import math
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from PIL import Image, ImageDraw

from cartoon_studio import config
from cartoon_studio.adapters.drawing import (
    linear_gradient,
    load_font,
    quadratic_curve,
    transparent_layer,
    with_alpha,
    wrap_text,
)
from cartoon_studio.domain.errors import RenderError
from cartoon_studio.domain.models import Scene
from cartoon_studio.domain.palette import hex_to_rgb, tint
from cartoon_studio.ports.interfaces import IFrameCompositor

TAU = math.pi * 2

INK = (15, 23, 42)  # slate-900
HUD_TEXT = (248, 250, 252)  # slate-50

WAVE_COUNT = 4
WAVE_PHASE_STEP = 1.2
WAVE_AMPLITUDE = 40
WAVE_SAMPLE_STEP = 20
WAVE_ALPHA = 0.35

FLOAT_AMPLITUDE = 16
CAPTION_BOB_AMPLITUDE = 12
CAPTION_LINE_PHASE = 0.5
CAPTION_LINE_HEIGHT = 48


@dataclass(frozen=True)
class FrameContext:
    """Everything a layer may look at. Frames are a pure function of this tuple."""
    scene: Scene
    progress: float
    palette: Tuple[str, ...]
    title: str
    width: int
    height: int

    def color(self, offset: int = 0) -> str:
        """Palette entry for this scene, indexed cyclically."""
        return self.palette[(self.scene.index + offset) % len(self.palette)]

    @property
    def phase(self) -> float:
        return self.progress * TAU


Layer = Callable[[FrameContext], Image.Image]


def paint_background(ctx: FrameContext) -> Image.Image:
    """Scene gradient plus four translucent sine-wave bands drifting with progress."""
    base = ctx.color(0)
    accent = ctx.color(1)
    layer = linear_gradient(ctx.width, ctx.height, tint(base, 0.1), tint(accent, -0.15))

    wave_fill = with_alpha(tint(accent, 0.2), WAVE_ALPHA)
    for wave in range(WAVE_COUNT):
        offset = (ctx.phase + wave * WAVE_PHASE_STEP) % TAU
        baseline = ctx.height * (0.2 + wave * 0.2)
        points = [(0.0, baseline)]
        for x in range(0, ctx.width + 1, WAVE_SAMPLE_STEP):
            y = baseline + math.sin(offset + (x / ctx.width) * math.pi * 4) * WAVE_AMPLITUDE
            points.append((float(x), y))
        points += [(float(ctx.width), float(ctx.height)), (0.0, float(ctx.height))]

        # One overlay per band so overlapping bands stack their translucency
        band = transparent_layer(ctx.width, ctx.height)
        ImageDraw.Draw(band).polygon(points, fill=wave_fill)
        layer = Image.alpha_composite(layer, band)
    return layer


def paint_character(ctx: FrameContext) -> Image.Image:
    """The floating mascot: body, visor head, two eyes and two curved arms."""
    layer = transparent_layer(ctx.width, ctx.height)
    draw = ImageDraw.Draw(layer)
    body = hex_to_rgb(ctx.color(2))
    accent = hex_to_rgb(ctx.color(1))

    cx = ctx.width * 0.25
    cy = ctx.height * 0.6 + math.sin(ctx.phase) * FLOAT_AMPLITUDE

    def ellipse(x, y, rx, ry, fill):
        draw.ellipse((cx + x - rx, cy + y - ry, cx + x + rx, cy + y + ry), fill=fill)

    ellipse(0, 0, 110, 140, body)
    ellipse(0, -20, 70, 60, INK)
    # The eyes are disjoint, so the even-odd fill of both circles is just both discs
    for eye_x in (-25, 25):
        ellipse(eye_x, -30, 18, 18, accent)

    for side in (-1, 1):
        arm = quadratic_curve(
            (cx + side * 70, cy),
            (cx + side * 120, cy - 40),
            (cx + side * 140, cy - 10),
        )
        draw.line(arm, fill=accent, width=8, joint="curve")
    return layer


def paint_title(ctx: FrameContext) -> Image.Image:
    """Job title, centred, identical on every frame."""
    layer = transparent_layer(ctx.width, ctx.height)
    draw = ImageDraw.Draw(layer)
    draw.text(
        (ctx.width / 2, ctx.height * 0.18),
        ctx.title,
        font=load_font(56, bold=True),
        fill=with_alpha(INK, 0.7),
        anchor="ms",
    )
    return layer


def paint_caption(ctx: FrameContext) -> Image.Image:
    """Scene text wrapped to half the canvas, each line bobbing on its own phase."""
    layer = transparent_layer(ctx.width, ctx.height)
    draw = ImageDraw.Draw(layer)
    font = load_font(40)
    left = ctx.width * 0.45
    base_y = ctx.height * 0.42

    lines = wrap_text(draw, ctx.scene.text, font, ctx.width * 0.5)
    for index, line in enumerate(lines):
        offset = math.sin(ctx.phase + index * CAPTION_LINE_PHASE) * CAPTION_BOB_AMPLITUDE
        draw.text(
            (left, base_y + index * CAPTION_LINE_HEIGHT + offset),
            line,
            font=font,
            fill=with_alpha(INK, 0.9),
            anchor="ls",
        )

    draw.line(
        [(left, base_y - 60), (ctx.width * 0.85, base_y - 60)],
        fill=hex_to_rgb(ctx.palette[0]),
        width=4,
    )
    return layer


def paint_hud(ctx: FrameContext) -> Image.Image:
    """Top-left badge: scene counter and animation percentage."""
    layer = transparent_layer(ctx.width, ctx.height)
    draw = ImageDraw.Draw(layer)
    draw.rounded_rectangle((48, 48, 48 + 240, 48 + 80), radius=20, fill=with_alpha(INK, 0.35))
    draw.text(
        (72, 96),
        f"Scene {ctx.scene.index + 1}/{ctx.scene.total}",
        font=load_font(26, bold=True),
        fill=HUD_TEXT,
        anchor="ls",
    )
    draw.text(
        (72, 124),
        f"{percent(ctx.progress)}% animated",
        font=load_font(18),
        fill=HUD_TEXT,
        anchor="ls",
    )
    return layer


def percent(progress: float) -> int:
    """Progress as a whole percentage, halves rounded up."""
    return int(math.floor(progress * 100 + 0.5))


LAYERS: Tuple[Layer, ...] = (
    paint_background,
    paint_character,
    paint_title,
    paint_caption,
    paint_hud,
)


class PillowFrameCompositor(IFrameCompositor):
    """Paints frames by stacking LAYERS with Pillow."""

    def __init__(
        self,
        width: int = config.VIDEO_WIDTH,
        height: int = config.VIDEO_HEIGHT,
        layers: Sequence[Layer] = LAYERS,
    ):
        self.width = width
        self.height = height
        self.layers = tuple(layers)

    def context(self, scene: Scene, progress: float, palette: Sequence[str], title: str) -> FrameContext:
        return FrameContext(
            scene=scene,
            progress=float(progress),
            palette=tuple(palette),
            title=title,
            width=self.width,
            height=self.height,
        )

    def composite(
        self,
        scene: Scene,
        progress: float,
        palette: Sequence[str],
        title: str,
    ) -> Image.Image:
        ctx = self.context(scene, progress, palette, title)
        canvas = Image.new("RGBA", (self.width, self.height), (0, 0, 0, 255))
        for layer in self.layers:
            try:
                overlay = layer(ctx)
            except (OSError, ValueError, TypeError) as e:
                raise RenderError(
                    f"Layer {layer.__name__} failed for scene {scene.index + 1}/{scene.total}: {e}"
                ) from e
            canvas = Image.alpha_composite(canvas, overlay)
        return canvas.convert("RGB")


def encode_png(image: Image.Image, compress_level: int = 3) -> bytes:
    """PNG bytes for ``image``; identical images give identical bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG", compress_level=compress_level)
    return buffer.getvalue()
