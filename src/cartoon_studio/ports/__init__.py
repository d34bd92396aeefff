"""Ports (interfaces) – depend on these, implement in adapters."""

from cartoon_studio.ports.interfaces import (
    IFrameCompositor,
    IPublisher,
    IVideoEncoder,
)

__all__ = [
    "IFrameCompositor",
    "IPublisher",
    "IVideoEncoder",
]
