"""IPublisher adapter: writes one JSON metadata bundle per destination platform."""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Dict, List, Sequence

from cartoon_studio import config
from cartoon_studio.domain.models import PublishPayload, PublishResult
from cartoon_studio.ports.interfaces import IPublisher

logger = logging.getLogger(__name__)

PLATFORM_META: Dict[str, Dict[str, str]] = {
    "youtube": {
        "title_suffix": " | Animated Explainer",
        "hashtag": "#explainer #cartoon",
        "aspect_ratio": "16:9",
    },
    "tiktok": {
        "title_suffix": " | TikTok Short",
        "hashtag": "#fyp #cartoonstudio",
        "aspect_ratio": "9:16",
    },
    "instagram": {
        "title_suffix": " | Reels Drop",
        "hashtag": "#reels #motiondesign",
        "aspect_ratio": "9:16",
    },
    "facebook": {
        "title_suffix": " | Community Launch",
        "hashtag": "#brandstory #fanclub",
        "aspect_ratio": "4:5",
    },
    "x": {
        "title_suffix": " | Micro Episode",
        "hashtag": "#animate #NowPlaying",
        "aspect_ratio": "16:9",
    },
    "linkedin": {
        "title_suffix": " | Pro Series",
        "hashtag": "#leadership #innovation",
        "aspect_ratio": "1:1",
    },
    "pinterest": {
        "title_suffix": " | Idea Pin",
        "hashtag": "#creatorhub #tutorial",
        "aspect_ratio": "2:3",
    },
}

PLATFORMS = tuple(PLATFORM_META)


class MetadataBundlePublisher(IPublisher):
    """
    Packages a finished video for each destination as
    ``<output_dir>/<job_id>/<platform>.json``. No platform API is called.
    """

    def __init__(self, output_dir: str = config.OUTPUT_DIR):
        self.output_dir = output_dir

    def supports(self, platform: str) -> bool:
        return platform in PLATFORM_META

    def build_record(self, platform: str, payload: PublishPayload) -> Dict[str, str]:
        meta = PLATFORM_META[platform]
        return {
            "jobId": payload.job_id,
            "platform": platform,
            "title": f"{payload.title}{meta['title_suffix']}",
            "caption": f"{payload.script_summary} {meta['hashtag']}",
            "aspectRatio": meta["aspect_ratio"],
            "source": payload.video_path,
            "uploadedAt": datetime.now(timezone.utc).isoformat(),
        }

    def publish(
        self,
        platforms: Sequence[str],
        payload: PublishPayload,
    ) -> List[PublishResult]:
        unknown = [p for p in platforms if not self.supports(p)]
        if unknown:
            raise ValueError(f"Unknown platform(s): {', '.join(unknown)}")

        bundle_dir = os.path.join(self.output_dir, payload.job_id)
        os.makedirs(bundle_dir, exist_ok=True)

        results = []
        for platform in platforms:
            record = self.build_record(platform, payload)
            record_path = os.path.join(bundle_dir, f"{platform}.json")
            with open(record_path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2)
            logger.info("Metadata bundle written: %s", record_path)
            results.append(
                PublishResult(
                    platform=platform,
                    status="success",
                    detail=f"Metadata packaged ({record['aspectRatio']}) & scheduled.",
                )
            )
        return results
