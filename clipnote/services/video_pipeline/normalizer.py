"""
Raw provider transcript -> timed segments with chapter flags.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterable, List

from clipnote.models.models import RawTranscriptEntry, TranscriptSegment
from clipnote.services.video_pipeline.constants import (
    CHAPTER_EXCLUDED_SUBSTRING,
    CHAPTER_INTERVAL,
    CHAPTER_MAX_CHARS,
    NA_SENTINEL,
)
from clipnote.services.video_pipeline.errors import EmptyTranscriptError
from clipnote.utils.time_utils import format_clock, format_short_time


def is_chapter_start(text: str, index: int) -> bool:
    """
    Approximate chapter detection: short, non-placeholder entries on every
    CHAPTER_INTERVAL-th position. Placeholder until real topic segmentation exists.
    """
    return (
        len(text) < CHAPTER_MAX_CHARS
        and CHAPTER_EXCLUDED_SUBSTRING not in text
        and text != NA_SENTINEL
        and (index == 0 or index % CHAPTER_INTERVAL == 0)
    )


def coerce_entry(item: Any) -> RawTranscriptEntry:
    """Accept dataclass entries, dicts, or provider snippet objects (text/start/duration)."""
    if isinstance(item, RawTranscriptEntry):
        return item
    if isinstance(item, Mapping):
        text = item.get("text")
        offset = item.get("offset", item.get("start"))
        duration = item.get("duration")
    else:
        text = getattr(item, "text", None)
        offset = getattr(item, "offset", None)
        if offset is None:
            offset = getattr(item, "start", None)
        duration = getattr(item, "duration", None)
    return RawTranscriptEntry(
        text=str(text or ""),
        offset=float(offset or 0),
        duration=float(duration or 0),
    )


def normalize_transcript(entries: Iterable[Any]) -> List[TranscriptSegment]:
    raw_entries = [coerce_entry(item) for item in entries]
    if not raw_entries:
        raise EmptyTranscriptError("Cannot normalize an empty transcript")

    segments: List[TranscriptSegment] = []
    for index, entry in enumerate(raw_entries):
        start = entry.offset
        end = start + entry.duration
        text = entry.text if entry.text != NA_SENTINEL else f"Segment at {format_short_time(start)}"
        segments.append(
            TranscriptSegment(
                start=format_clock(start),
                end=format_clock(end),
                text=text,
                # heuristic sees the provider text, not the placeholder
                is_chapter_start=is_chapter_start(entry.text, index),
            )
        )
    return segments
