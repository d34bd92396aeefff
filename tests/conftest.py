"""Shared test fixtures for cartoon-studio."""

import os
from typing import List, Sequence, Tuple

import pytest
from PIL import Image

from cartoon_studio.domain.errors import EncodeError
from cartoon_studio.domain.models import FrameSequence, Scene
from cartoon_studio.ports.interfaces import IFrameCompositor, IVideoEncoder


class TinyCompositor(IFrameCompositor):
    """Fast stand-in: an 8x8 swatch whose colour encodes scene index and progress."""

    def __init__(self, width: int = 64, height: int = 36):
        self.width = width
        self.height = height
        self.calls: List[Tuple[int, float]] = []

    def composite(self, scene: Scene, progress: float, palette: Sequence[str], title: str) -> Image.Image:
        self.calls.append((scene.index, progress))
        return Image.new("RGB", (8, 8), (scene.index % 256, int(progress * 255), len(title) % 256))


class RecordingEncoder(IVideoEncoder):
    """Writes a placeholder artifact and remembers what it was asked to encode."""

    def __init__(self):
        self.frames = None
        self.frame_files: List[str] = []

    def encode(self, frames: FrameSequence, output_path: str, fps: int, width: int, height: int) -> str:
        self.frames = frames
        self.frame_files = sorted(os.listdir(frames.directory))
        with open(output_path, "wb") as f:
            f.write(b"\x00\x00\x00\x18ftypmp42")
        return output_path


class FailingEncoder(IVideoEncoder):
    """Leaves a partial file at the public path, then fails like a crashed ffmpeg."""

    def encode(self, frames: FrameSequence, output_path: str, fps: int, width: int, height: int) -> str:
        with open(output_path, "wb") as f:
            f.write(b"partial")
        raise EncodeError("ffmpeg exited with code 1", returncode=1, stderr="boom")


@pytest.fixture
def tiny_compositor():
    return TinyCompositor()


@pytest.fixture
def recording_encoder():
    return RecordingEncoder()


@pytest.fixture
def failing_encoder():
    return FailingEncoder()


@pytest.fixture
def job_dirs(tmp_path):
    """(output_dir, temp_dir) for one pipeline."""
    output_dir = tmp_path / "generated"
    temp_dir = tmp_path / "scratch"
    temp_dir.mkdir()
    return str(output_dir), str(temp_dir)
