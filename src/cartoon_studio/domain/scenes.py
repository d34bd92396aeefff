"""Script segmentation – free-form prose to an ordered list of scenes."""

import re
from typing import List

from cartoon_studio.domain.models import Scene

FALLBACK_SCENES = (
    "Introduce the brand hero.",
    "Showcase the top features.",
    "Call fans to action with energy.",
)

SUMMARY_LIMIT = 180

_LINE_BREAKS = re.compile(r"\n+")
# Zero-width split after the terminator so it stays with the preceding fragment
_SENTENCE_END = re.compile(r"(?<=[.!?])")
_WHITESPACE = re.compile(r"\s+")


def split_fragments(script: str) -> List[str]:
    """Split a script into trimmed, non-empty sentence fragments."""
    fragments = []
    for line in _LINE_BREAKS.split(script or ""):
        for fragment in _SENTENCE_END.split(line):
            fragment = fragment.strip()
            if fragment:
                fragments.append(fragment)
    return fragments


def build_scenes(script: str) -> List[Scene]:
    """
    Turn a script into scenes. Never raises and always returns at least one scene:
    a script with no usable fragments gets the fixed three-scene storyboard.
    """
    fragments = split_fragments(script) or list(FALLBACK_SCENES)
    total = len(fragments)
    return [Scene(text=text, index=index, total=total) for index, text in enumerate(fragments)]


def summarize_script(script: str, limit: int = SUMMARY_LIMIT) -> str:
    """Collapse whitespace and ellipsis-truncate to at most ``limit`` characters."""
    text = _WHITESPACE.sub(" ", script or "").strip()
    if len(text) <= limit:
        return text
    return f"{text[:limit - 3]}..."
