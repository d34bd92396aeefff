"""
Port interfaces (Dependency Inversion).
Implement these in adapters; the application layer depends only on these abstractions.
Any encoder honouring the codec / pixel-format / faststart contract can replace the ffmpeg one.
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from PIL import Image

from cartoon_studio.domain.models import FrameSequence, PublishPayload, PublishResult, Scene


class IFrameCompositor(ABC):
    """Pure frame painter: identical inputs must give an identical image."""

    width: int
    height: int

    @abstractmethod
    def composite(
        self,
        scene: Scene,
        progress: float,
        palette: Sequence[str],
        title: str,
    ) -> Image.Image:
        """Paint one frame of ``scene`` at ``progress`` in [0, 1]."""
        pass


class IVideoEncoder(ABC):
    """Frame sequence -> single encoded video artifact."""

    @abstractmethod
    def encode(
        self,
        frames: FrameSequence,
        output_path: str,
        fps: int,
        width: int,
        height: int,
    ) -> str:
        """Encode ``frames`` at ``fps`` into ``output_path``; return the path or raise EncodeError."""
        pass


class IPublisher(ABC):
    """Distribution stage: one metadata record per destination."""

    @abstractmethod
    def supports(self, platform: str) -> bool:
        """True if ``platform`` is a destination this publisher can package for."""
        pass

    @abstractmethod
    def publish(
        self,
        platforms: Sequence[str],
        payload: PublishPayload,
    ) -> List[PublishResult]:
        """Package ``payload`` for every platform; return one result per platform."""
        pass
