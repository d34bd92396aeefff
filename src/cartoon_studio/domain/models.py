"""Domain models – scenes, job timeline, generation results."""

import enum
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional, Sequence


@dataclass(frozen=True)
class Scene:
    """One timed scene of the storyboard. ``index < total`` for every scene of a job."""
    text: str
    index: int
    total: int


@dataclass
class TimelineEntry:
    """A job checkpoint. Goes from incomplete to complete exactly once."""
    label: str
    detail: Optional[str] = None
    completed: bool = False

    def complete(self, detail: Optional[str] = None) -> None:
        if self.completed:
            raise ValueError(f"Checkpoint already completed: {self.label}")
        if detail is not None:
            self.detail = detail
        self.completed = True

    def to_dict(self) -> Dict[str, Any]:
        data = {"label": self.label, "completed": self.completed}
        if self.detail is not None:
            data["detail"] = self.detail
        return data


class JobState(str, enum.Enum):
    SEGMENTING = "segmenting"
    RENDERING = "rendering"
    ENCODING = "encoding"
    DONE = "done"
    FAILED = "failed"


# Forward transitions of the job state machine; FAILED is reachable from any non-terminal state.
_NEXT_STATE = {
    JobState.SEGMENTING: JobState.RENDERING,
    JobState.RENDERING: JobState.ENCODING,
    JobState.ENCODING: JobState.DONE,
}


@dataclass
class Job:
    """Mutable record of one generation request."""
    job_id: str
    timeline: List[TimelineEntry]
    state: JobState = JobState.SEGMENTING
    frame_count: int = 0
    video_path: Optional[str] = None

    @property
    def is_terminal(self) -> bool:
        return self.state in (JobState.DONE, JobState.FAILED)

    def advance(self, detail: Optional[str] = None) -> JobState:
        """Move to the next state and complete the checkpoint for the stage just finished."""
        if self.is_terminal:
            raise ValueError(f"Job {self.job_id} is already {self.state.value}")
        checkpoint = self.timeline[list(_NEXT_STATE).index(self.state)]
        checkpoint.complete(detail)
        self.state = _NEXT_STATE[self.state]
        return self.state

    def fail(self) -> None:
        if self.is_terminal:
            raise ValueError(f"Job {self.job_id} is already {self.state.value}")
        self.state = JobState.FAILED


@dataclass(frozen=True)
class FrameSequence:
    """An ordered, filename-addressable run of PNG frames on disk."""
    directory: str
    count: int
    digits: int = 4
    prefix: str = "frame_"

    @property
    def pattern(self) -> str:
        """printf-style pattern understood by ffmpeg's image2 demuxer."""
        return os.path.join(self.directory, f"{self.prefix}%0{self.digits}d.png")

    def filename(self, sequence_number: int) -> str:
        return f"{self.prefix}{sequence_number:0{self.digits}d}.png"

    def paths(self) -> List[str]:
        return [
            os.path.join(self.directory, self.filename(n))
            for n in range(1, self.count + 1)
        ]


@dataclass(frozen=True)
class GenerateOptions:
    """Inputs of one generation request (validated by the caller)."""
    title: str
    script: str
    palette: Sequence[str]
    style: str = "cartoon"


@dataclass
class GenerationResult:
    job_id: str
    timeline: List[TimelineEntry]
    video_path: str
    public_url: str
    frame_count: int


@dataclass(frozen=True)
class PublishPayload:
    """What the metadata-bundle writer receives from a finished job."""
    job_id: str
    video_path: str
    title: str
    script_summary: str


@dataclass(frozen=True)
class PublishResult:
    platform: str
    status: str  # 'success' | 'error'
    detail: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass
class GenerationReport:
    """Generation plus publishing, as returned to the request boundary."""
    generation: GenerationResult
    publish: List[PublishResult] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "jobId": self.generation.job_id,
            "videoUrl": self.generation.public_url,
            "frameCount": self.generation.frame_count,
            "timeline": [entry.to_dict() for entry in self.generation.timeline],
            "publish": [result.to_dict() for result in self.publish],
        }
