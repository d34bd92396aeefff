"""
Adapters – concrete implementations of ports.
Pillow paints the frames, an ffmpeg subprocess encodes them and the
publisher writes per-platform metadata bundles. Swap any of them by passing
an override to default_adapters().
"""

from cartoon_studio.adapters.compositor import PillowFrameCompositor
from cartoon_studio.adapters.encoder import FFmpegVideoEncoder
from cartoon_studio.adapters.publish import MetadataBundlePublisher


def default_adapters(**overrides):
    """
    Build default adapter instances (use package config).
    Overrides: compositor=..., encoder=..., publisher=... for testing or another encoder.
    """
    defaults = {
        "compositor": PillowFrameCompositor(),
        "encoder": FFmpegVideoEncoder(),
        "publisher": MetadataBundlePublisher(),
    }
    defaults.update(overrides)
    return defaults
