"""
Cache-or-fetch access to normalized video transcripts.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from clipnote.models.models import TranscriptResult, TranscriptSegment
from clipnote.repositories.transcript_repo import TranscriptRepository
from clipnote.repositories.user_video_repo import UserVideoRepository
from clipnote.services.video_pipeline.constants import TRANSCRIPT_UNAVAILABLE_MESSAGE
from clipnote.services.video_pipeline.errors import NoTranscriptAvailable
from clipnote.services.video_pipeline.normalizer import normalize_transcript
from clipnote.services.video_pipeline.providers import TranscriptProvider, YouTubeTranscriptProvider
from clipnote.utils.logger import get_logger
from clipnote.utils.time_utils import clock_to_seconds
from clipnote.utils.youtube_utils import extract_video_id

logger = get_logger(__name__)


class TranscriptService:
    def __init__(
        self,
        transcript_provider: Optional[TranscriptProvider] = None,
        transcript_repo: Optional[TranscriptRepository] = None,
        user_video_repo: Optional[UserVideoRepository] = None,
    ) -> None:
        self.provider = transcript_provider or YouTubeTranscriptProvider()
        self.transcript_repo = transcript_repo or TranscriptRepository()
        self.user_video_repo = user_video_repo or UserVideoRepository()

    def get_or_fetch(self, video_id: str, user_id: str) -> TranscriptResult:
        """
        Stored segments win; otherwise fetch, normalize and persist.

        Never raises. Any failure yields an empty result flagged with `error`,
        and no user-video record is created for a transcript that could not be shown.
        """
        video_id = extract_video_id(video_id) or video_id
        try:
            stored = self.transcript_repo.get_by_video_id(video_id)
            if stored:
                segments = _rows_to_segments(sort_rows(stored))
                user_video = self.user_video_repo.get_or_create(user_id, video_id, summary="")
                return TranscriptResult(segments=segments, user_video=user_video)

            entries = self.provider.fetch(video_id)
            if not entries:
                raise NoTranscriptAvailable(f"No transcript content available for {video_id}")

            segments = normalize_transcript(entries)
            self.transcript_repo.upsert_segments(video_id, segments)
            logger.info("Stored %s transcript segments for video %s", len(segments), video_id)

            user_video = self.user_video_repo.get_or_create(user_id, video_id, summary="")
            return TranscriptResult(segments=segments, user_video=user_video)
        except Exception:
            logger.exception("Error fetching transcript for video %s", video_id)
            return TranscriptResult(
                segments=[],
                user_video=None,
                error=True,
                error_message=TRANSCRIPT_UNAVAILABLE_MESSAGE,
            )


def sort_rows(rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Order stored rows by start time; segment_index breaks ties within the same second."""
    return sorted(rows, key=lambda row: (clock_to_seconds(row["start_time"]), int(row.get("segment_index") or 0)))


def _rows_to_segments(rows: List[Dict[str, Any]]) -> List[TranscriptSegment]:
    return [
        TranscriptSegment(
            start=str(row["start_time"]),
            end=str(row["end_time"]),
            text=str(row["text"] or ""),
            is_chapter_start=bool(row["is_chapter_start"]),
        )
        for row in rows
    ]
