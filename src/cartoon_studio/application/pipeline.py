"""
Cartoon pipeline – single responsibility: orchestrate segment → render frames → encode → optional publish.
Depends only on port interfaces (Dependency Inversion).

Job state machine: SEGMENTING → RENDERING → ENCODING → DONE, with FAILED
reachable from any non-terminal state. Each forward step completes exactly one
timeline checkpoint. A failed job keeps no artifact at its public path and no
transient frames on disk.
"""

import logging
import os
import shutil
import tempfile
import uuid
from typing import List, Optional, Sequence

from cartoon_studio import config
from cartoon_studio.application.animator import AnimationDriver, ProgressCallback
from cartoon_studio.domain.errors import CartoonStudioError, JobFailedError
from cartoon_studio.domain.models import (
    GenerateOptions,
    GenerationReport,
    GenerationResult,
    Job,
    JobState,
    PublishPayload,
    TimelineEntry,
)
from cartoon_studio.domain.palette import normalize_palette
from cartoon_studio.domain.scenes import build_scenes, summarize_script
from cartoon_studio.ports.interfaces import IFrameCompositor, IPublisher, IVideoEncoder

logger = logging.getLogger(__name__)


def new_timeline() -> List[TimelineEntry]:
    return [
        TimelineEntry("Storyboard synthesized", "Parsing script into animated scenes."),
        TimelineEntry("Frames rendered", "Painting cartoon frames with motion paths."),
        TimelineEntry("Video authored", "Encoding HD master and prepping metadata."),
    ]


class CartoonPipeline:
    """
    Orchestrates the full generation pipeline.
    All dependencies are injected (ports); no concrete implementations here.
    """

    def __init__(
        self,
        *,
        compositor: IFrameCompositor,
        encoder: IVideoEncoder,
        publisher: Optional[IPublisher] = None,
        output_dir: str = config.OUTPUT_DIR,
        temp_dir: str = config.TEMP_DIR,
        public_url_prefix: str = config.PUBLIC_URL_PREFIX,
        fps: int = config.FPS,
        scene_duration: int = config.SCENE_DURATION_SECONDS,
        workers: int = config.RENDER_WORKERS,
        progress_callback: Optional[ProgressCallback] = None,
    ):
        self._compositor = compositor
        self._encoder = encoder
        self._publisher = publisher
        self._output_dir = output_dir
        self._temp_dir = temp_dir
        self._public_url_prefix = public_url_prefix.rstrip("/")
        self._fps = fps
        self._scene_duration = scene_duration
        self._driver = AnimationDriver(compositor, workers=workers)
        self._progress_callback = progress_callback

    @property
    def frames_per_scene(self) -> int:
        return self._fps * self._scene_duration

    def video_path_for(self, job_id: str) -> str:
        return os.path.join(self._output_dir, f"{job_id}.mp4")

    def generate(self, options: GenerateOptions, job_id: Optional[str] = None) -> GenerationResult:
        """Run one job end to end. Returns the result or raises JobFailedError."""
        job = Job(job_id=job_id or uuid.uuid4().hex, timeline=new_timeline())
        video_path = self.video_path_for(job.job_id)
        temp_dir = None
        logger.info("Job %s started: %r", job.job_id, options.title)

        try:
            # [1/3] Storyboard
            palette = normalize_palette(options.palette)
            scenes = build_scenes(options.script)
            job.advance(f"Identified {len(scenes)} scenes for {options.style} style.")
            logger.info("[1/3] Job %s: %d scenes, palette %s", job.job_id, len(scenes), ", ".join(palette))

            # [2/3] Frames
            temp_dir = tempfile.mkdtemp(prefix=f"cartoon-{job.job_id}-", dir=self._temp_dir)
            frames = self._driver.render(
                scenes,
                palette,
                options.title,
                self.frames_per_scene,
                os.path.join(temp_dir, "frames"),
                progress_callback=self._progress_callback,
            )
            job.frame_count = frames.count
            job.advance(f"Rendered {frames.count} frames at {self._fps} fps.")
            logger.info("[2/3] Job %s: rendered %d frames", job.job_id, frames.count)

            # [3/3] Video
            os.makedirs(self._output_dir, exist_ok=True)
            job.video_path = self._encoder.encode(
                frames,
                video_path,
                self._fps,
                self._compositor.width,
                self._compositor.height,
            )
            if not os.path.exists(job.video_path):
                raise CartoonStudioError(f"Encoder returned {job.video_path} but nothing was written")
            job.advance(".mp4 master ready for multi-channel distribution.")
            logger.info("[3/3] Job %s: video saved to %s", job.job_id, job.video_path)
        except Exception as e:
            # Adapters may raise anything; the caller only ever sees JobFailedError
            job.fail()
            logger.error("Job %s failed while %s: %s", job.job_id, _stage_name(job), e)
            _remove_path(video_path)
            raise JobFailedError(job.job_id, job.timeline) from e
        finally:
            if temp_dir:
                shutil.rmtree(temp_dir, ignore_errors=True)

        return GenerationResult(
            job_id=job.job_id,
            timeline=job.timeline,
            video_path=job.video_path,
            public_url=f"{self._public_url_prefix}/{os.path.basename(job.video_path)}",
            frame_count=job.frame_count,
        )

    def generate_and_publish(
        self,
        options: GenerateOptions,
        platforms: Sequence[str],
    ) -> GenerationReport:
        """
        Generate the video, then hand its metadata to the publisher. A failed job publishes nothing.
        Unknown platforms are rejected with ValueError before any frame is rendered.
        """
        if platforms and self._publisher is not None:
            unknown = [p for p in platforms if not self._publisher.supports(p)]
            if unknown:
                raise ValueError(f"Unknown platform(s): {', '.join(unknown)}")

        generation = self.generate(options)
        if not platforms or self._publisher is None:
            return GenerationReport(generation=generation)

        payload = PublishPayload(
            job_id=generation.job_id,
            video_path=generation.public_url,
            title=options.title,
            script_summary=summarize_script(options.script),
        )
        results = self._publisher.publish(list(platforms), payload)
        return GenerationReport(generation=generation, publish=results)


def _stage_name(job: Job) -> str:
    """Name of the stage that was running when the job failed, from its completed checkpoints."""
    done = sum(1 for entry in job.timeline if entry.completed)
    return (JobState.SEGMENTING, JobState.RENDERING, JobState.ENCODING)[min(done, 2)].value


def _remove_path(path: str) -> None:
    for candidate in (path, f"{path}.part"):
        try:
            os.remove(candidate)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Could not remove %s: %s", candidate, e)
