"""Domain models and value logic."""

from cartoon_studio.domain.models import (
    FrameSequence,
    GenerateOptions,
    GenerationReport,
    GenerationResult,
    Job,
    JobState,
    PublishPayload,
    PublishResult,
    Scene,
    TimelineEntry,
)
from cartoon_studio.domain.palette import FALLBACK_PALETTE, normalize_palette
from cartoon_studio.domain.scenes import FALLBACK_SCENES, build_scenes, summarize_script

__all__ = [
    "FALLBACK_PALETTE",
    "FALLBACK_SCENES",
    "FrameSequence",
    "GenerateOptions",
    "GenerationReport",
    "GenerationResult",
    "Job",
    "JobState",
    "PublishPayload",
    "PublishResult",
    "Scene",
    "TimelineEntry",
    "build_scenes",
    "normalize_palette",
    "summarize_script",
]
