"""
Animation driver – scenes x frames-per-scene -> ordered PNG frame sequence.

Every frame is a pure function of (scene, progress, palette, title), so frame
computation can run on a worker pool. Frames are always written from the
calling thread in global sequence order: scene order first, then time order
within the scene.
"""

import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from cartoon_studio.adapters.compositor import encode_png
from cartoon_studio.domain.errors import FrameWriteError
from cartoon_studio.domain.models import FrameSequence, Scene
from cartoon_studio.ports.interfaces import IFrameCompositor

logger = logging.getLogger(__name__)

MIN_DIGITS = 4

ProgressCallback = Callable[[int, int], None]


def local_progress(local_index: int, frames_per_scene: int) -> float:
    """Progress of a frame within its scene; a single-frame scene is fully animated."""
    if frames_per_scene == 1:
        return 1.0
    return local_index / (frames_per_scene - 1)


def sequence_digits(total_frames: int) -> int:
    """Zero-padding width so lexicographic and numeric frame order agree."""
    return max(MIN_DIGITS, len(str(total_frames)))


def frame_plan(scenes: Sequence[Scene], frames_per_scene: int) -> Iterator[Tuple[int, Scene, float]]:
    """Yield (sequence_number, scene, progress) in emission order, 1-based."""
    sequence_number = 0
    for scene in scenes:
        for local_index in range(frames_per_scene):
            sequence_number += 1
            yield sequence_number, scene, local_progress(local_index, frames_per_scene)


class AnimationDriver:
    """Renders every frame of a job into ``frame_dir``."""

    def __init__(self, compositor: IFrameCompositor, workers: int = 1, batch_size: Optional[int] = None):
        self._compositor = compositor
        self._workers = max(1, workers)
        self._batch_size = batch_size or self._workers * 4

    def render(
        self,
        scenes: Sequence[Scene],
        palette: Sequence[str],
        title: str,
        frames_per_scene: int,
        frame_dir: str,
        progress_callback: Optional[ProgressCallback] = None,
    ) -> FrameSequence:
        if frames_per_scene <= 0:
            raise ValueError(f"frames_per_scene must be positive, got {frames_per_scene}")

        total = frames_per_scene * len(scenes)
        sequence = FrameSequence(directory=frame_dir, count=total, digits=sequence_digits(total))
        palette = tuple(palette)

        try:
            os.makedirs(frame_dir, exist_ok=True)
        except OSError as e:
            raise FrameWriteError(f"Could not create frame directory {frame_dir}: {e}") from e

        logger.info(
            "Rendering %d frames (%d scenes x %d) with %d worker(s)",
            total, len(scenes), frames_per_scene, self._workers,
        )

        def paint(item: Tuple[int, Scene, float]) -> bytes:
            _, scene, progress = item
            return encode_png(self._compositor.composite(scene, progress, palette, title))

        written = 0
        for sequence_number, payload in self._painted(frame_plan(scenes, frames_per_scene), paint):
            self._write(sequence, sequence_number, payload)
            written += 1
            if progress_callback is not None:
                progress_callback(written, total)

        logger.info("Rendered %d frames into %s", written, frame_dir)
        return sequence

    def _painted(self, plan, paint) -> Iterator[Tuple[int, bytes]]:
        if self._workers == 1:
            for item in plan:
                yield item[0], paint(item)
            return

        # Bounded batches keep at most batch_size encoded frames in memory;
        # executor.map returns results in submission order.
        with ThreadPoolExecutor(max_workers=self._workers) as pool:
            batch: List[Tuple[int, Scene, float]] = []
            for item in plan:
                batch.append(item)
                if len(batch) >= self._batch_size:
                    yield from zip((i[0] for i in batch), pool.map(paint, batch))
                    batch = []
            if batch:
                yield from zip((i[0] for i in batch), pool.map(paint, batch))

    @staticmethod
    def _write(sequence: FrameSequence, sequence_number: int, payload: bytes) -> None:
        path = os.path.join(sequence.directory, sequence.filename(sequence_number))
        try:
            with open(path, "wb") as f:
                f.write(payload)
        except OSError as e:
            raise FrameWriteError(f"Could not write frame {path}: {e}") from e
