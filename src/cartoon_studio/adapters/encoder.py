"""
IVideoEncoder adapter driving an external ffmpeg process.

The frame sequence is read through ffmpeg's numeric image2 pattern, encoded as
H.264 / yuv420p with the moov atom moved to the front (+faststart) so the MP4
can start playing before it is fully downloaded. Output is written to
``<output>.part`` and only renamed into place after a clean exit, so a failed
encode never leaves anything at the public path.
"""

import logging
import os
import subprocess
from typing import List, Optional

from cartoon_studio import config
from cartoon_studio.domain.errors import EncodeError
from cartoon_studio.domain.models import FrameSequence
from cartoon_studio.ports.interfaces import IVideoEncoder

logger = logging.getLogger(__name__)

VIDEO_CODEC = "libx264"
PIXEL_FORMAT = "yuv420p"
STDERR_TAIL_LINES = 20


def resolve_ffmpeg_binary(binary: Optional[str] = None) -> str:
    """Configured ffmpeg, else the binary imageio-ffmpeg ships for moviepy."""
    if binary:
        return binary
    if config.FFMPEG_BINARY:
        return config.FFMPEG_BINARY
    import imageio_ffmpeg

    return imageio_ffmpeg.get_ffmpeg_exe()


def build_ffmpeg_command(
    binary: str,
    frames: FrameSequence,
    output_path: str,
    fps: int,
    width: int,
    height: int,
) -> List[str]:
    return [
        binary,
        "-y",
        "-loglevel", "error",
        "-framerate", str(fps),
        "-start_number", "1",
        "-i", frames.pattern,
        "-c:v", VIDEO_CODEC,
        "-pix_fmt", PIXEL_FORMAT,
        "-movflags", "+faststart",
        "-vf", f"scale={width}:{height}",
        "-f", "mp4",
        output_path,
    ]


class FFmpegVideoEncoder(IVideoEncoder):
    """Encodes PNG frame sequences with an ffmpeg subprocess."""

    def __init__(
        self,
        ffmpeg_binary: Optional[str] = None,
        timeout: Optional[float] = None,
        verify_duration: bool = True,
    ):
        """
        Args:
            ffmpeg_binary: ffmpeg executable; defaults to config / imageio-ffmpeg
            timeout: seconds to wait for ffmpeg before giving up (None waits forever)
            verify_duration: read the finished file back and require
                duration == frames / fps (to within one frame) before exposing it
        """
        self._binary = ffmpeg_binary
        self._timeout = timeout
        self._verify_duration = verify_duration

    @property
    def binary(self) -> str:
        return resolve_ffmpeg_binary(self._binary)

    def encode(
        self,
        frames: FrameSequence,
        output_path: str,
        fps: int,
        width: int,
        height: int,
    ) -> str:
        if frames.count <= 0:
            raise EncodeError(f"No frames to encode in {frames.directory}")

        partial_path = f"{output_path}.part"
        cmd = build_ffmpeg_command(self.binary, frames, partial_path, fps, width, height)
        logger.info("Encoding %d frames at %d fps -> %s", frames.count, fps, output_path)
        logger.debug("ffmpeg command: %s", " ".join(cmd))

        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, timeout=self._timeout)
        except (OSError, subprocess.SubprocessError) as e:
            _remove_quietly(partial_path)
            raise EncodeError(f"Could not run encoder {cmd[0]}: {e}") from e

        if proc.returncode != 0:
            _remove_quietly(partial_path)
            tail = "\n".join(proc.stderr.strip().splitlines()[-STDERR_TAIL_LINES:])
            raise EncodeError(
                f"ffmpeg exited with code {proc.returncode}:\n{tail}",
                returncode=proc.returncode,
                stderr=proc.stderr,
            )

        if not os.path.exists(partial_path) or os.path.getsize(partial_path) == 0:
            _remove_quietly(partial_path)
            raise EncodeError(f"ffmpeg reported success but wrote no video to {partial_path}")

        if self._verify_duration:
            self._check_duration(partial_path, frames.count / fps, 1.0 / fps)

        os.replace(partial_path, output_path)
        logger.info("Video encoded: %s", output_path)
        return output_path

    @staticmethod
    def _check_duration(path: str, expected: float, tolerance: float) -> None:
        try:
            duration = probe_duration(path)
        except OSError as e:
            _remove_quietly(path)
            raise EncodeError(f"Encoded video {path} is unreadable: {e}") from e
        if abs(duration - expected) > tolerance + 1e-6:
            _remove_quietly(path)
            raise EncodeError(f"Encoded video lasts {duration:.3f}s, expected {expected:.3f}s")
        logger.debug("Encoded duration %.3fs (expected %.3fs)", duration, expected)


def probe_duration(video_path: str) -> float:
    """Duration in seconds as read back by moviepy."""
    from moviepy import VideoFileClip

    with VideoFileClip(video_path, audio=False) as clip:
        return float(clip.duration)


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
