"""
CLI entrypoint:
  python -m cartoon_studio --title "Launch day" --script "Hello. World! Go team?" \
      --palette "#38BDF8,#FACC15,#F472B6" --style playful --platform youtube --platform tiktok
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from cartoon_studio import config
from cartoon_studio.adapters import default_adapters
from cartoon_studio.adapters.encoder import FFmpegVideoEncoder
from cartoon_studio.adapters.publish import MetadataBundlePublisher, PLATFORMS
from cartoon_studio.application.pipeline import CartoonPipeline
from cartoon_studio.domain.errors import JobFailedError
from cartoon_studio.domain.models import GenerateOptions

MAX_PALETTE_COLORS = 8


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cartoon_studio",
        description="Turn a short script into an animated cartoon video plus per-platform metadata",
    )
    parser.add_argument("--title", required=True, help="Title painted on every frame (3-120 chars)")
    script = parser.add_mutually_exclusive_group(required=True)
    script.add_argument("--script", type=str, help="Script text (at least 10 chars)")
    script.add_argument("--script-file", type=str, help="Read the script from a file")
    parser.add_argument(
        "--palette",
        action="append",
        default=[],
        help="Hex colour(s); repeat the flag or separate with commas (1-8 colours)",
    )
    parser.add_argument("--style", default="cartoon", help="Style label (3-40 chars, informational)")
    parser.add_argument(
        "--platform",
        action="append",
        default=[],
        choices=PLATFORMS,
        help="Write a metadata bundle for this platform (repeatable)",
    )
    parser.add_argument("--fps", type=int, default=config.FPS, help="Frames per second")
    parser.add_argument(
        "--scene-seconds",
        type=int,
        default=config.SCENE_DURATION_SECONDS,
        help="Seconds each scene stays on screen",
    )
    parser.add_argument("--workers", type=int, default=config.RENDER_WORKERS, help="Frame rendering threads")
    parser.add_argument("--output-dir", default=config.OUTPUT_DIR, help="Where videos and metadata land")
    parser.add_argument("--ffmpeg", default=None, help="Path to the ffmpeg binary")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    return parser


def split_palette(values: List[str]) -> List[str]:
    colors = []
    for value in values:
        colors.extend(part.strip() for part in value.split(",") if part.strip())
    return colors


def validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> GenerateOptions:
    """Request-boundary checks; the core itself never rejects input."""
    if args.script_file:
        try:
            with open(args.script_file, encoding="utf-8") as f:
                script = f.read()
        except OSError as e:
            parser.error(f"cannot read --script-file: {e}")
    else:
        script = args.script

    palette = split_palette(args.palette)
    title = args.title.strip()
    style = args.style.strip()

    if not 3 <= len(title) <= 120:
        parser.error("--title must be 3-120 characters")
    if len(script) < 10:
        parser.error("--script must be at least 10 characters")
    if not 3 <= len(style) <= 40:
        parser.error("--style must be 3-40 characters")
    if not 1 <= len(palette) <= MAX_PALETTE_COLORS:
        parser.error(f"--palette needs 1-{MAX_PALETTE_COLORS} colours")
    if args.fps <= 0 or args.scene_seconds <= 0:
        parser.error("--fps and --scene-seconds must be positive")

    return GenerateOptions(title=title, script=script, palette=palette, style=style)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    options = validate_args(parser, args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    adapters = default_adapters(
        encoder=FFmpegVideoEncoder(ffmpeg_binary=args.ffmpeg),
        publisher=MetadataBundlePublisher(output_dir=args.output_dir),
    )
    pipeline = CartoonPipeline(
        **adapters,
        output_dir=args.output_dir,
        fps=args.fps,
        scene_duration=args.scene_seconds,
        workers=args.workers,
    )

    print("=" * 60, file=sys.stderr)
    print(f"Generating cartoon video: {options.title}", file=sys.stderr)
    print("=" * 60, file=sys.stderr)

    try:
        report = pipeline.generate_and_publish(options, args.platform)
    except JobFailedError as e:
        print(f"\n❌ Failed to generate the cartoon video (job {e.job_id}): {e.__cause__}", file=sys.stderr)
        for entry in e.timeline:
            mark = "✅" if entry.completed else "  "
            print(f"  {mark} {entry.label}", file=sys.stderr)
        return 1

    print(f"\n✅ Success! Video saved to: {report.generation.video_path}", file=sys.stderr)
    print(json.dumps(report.to_dict(), indent=2))
    return 0
