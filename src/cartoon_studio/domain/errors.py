"""Error types raised by the rendering pipeline.

Malformed user input (bad palette entries, scripts without sentences) never
raises: the segmenter and palette normalizer absorb it with fallback values.
Everything below is fatal for the job that raised it.
"""

from typing import List, Optional


class CartoonStudioError(Exception):
    """Base class for all pipeline errors."""


class RenderError(CartoonStudioError):
    """A drawing primitive failed while compositing a frame."""


class FrameWriteError(CartoonStudioError, OSError):
    """A frame could not be persisted to the frame store."""


class EncodeError(CartoonStudioError):
    """The external encoder exited uncleanly or produced no artifact."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class JobFailedError(CartoonStudioError):
    """Opaque failure signal for a whole job.

    Carries the job id and the timeline as it stood when the job failed, so
    only checkpoints that truly finished are reported as complete. The
    underlying cause is available as ``__cause__``.
    """

    def __init__(self, job_id: str, timeline: Optional[List] = None):
        super().__init__(f"Job {job_id} failed")
        self.job_id = job_id
        self.timeline = list(timeline or [])
