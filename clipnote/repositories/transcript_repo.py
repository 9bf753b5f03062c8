"""
Repository for normalized transcript segments.
"""
from typing import Any, Dict, Iterable, List

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session, utc_now_iso
from clipnote.models.models import TranscriptSegment


class TranscriptRepository:
    def get_by_video_id(self, youtube_id: str) -> List[Dict[str, Any]]:
        """Return stored rows for a video. Row order is not guaranteed."""
        with get_db_session() as session:
            rows = session.execute(
                text("""
                    SELECT youtube_id, segment_index, start_time, end_time, text, is_chapter_start
                    FROM transcript_segments
                    WHERE youtube_id = :youtube_id
                """),
                {"youtube_id": youtube_id},
            ).mappings().fetchall()
        return [dict(row) for row in rows]

    def upsert_segments(self, youtube_id: str, segments: Iterable[TranscriptSegment]) -> int:
        """
        Write segments keyed by (youtube_id, segment_index).

        Re-running with the same input leaves exactly one row per segment;
        rows past the new segment count are removed.
        """
        now = utc_now_iso()
        count = 0
        with get_db_session() as session:
            for idx, segment in enumerate(segments):
                session.execute(
                    text("""
                        INSERT INTO transcript_segments (
                            youtube_id, segment_index, start_time, end_time, text,
                            is_chapter_start, created_at, updated_at
                        ) VALUES (
                            :youtube_id, :segment_index, :start_time, :end_time, :text,
                            :is_chapter_start, :created_at, :updated_at
                        )
                        ON CONFLICT (youtube_id, segment_index) DO UPDATE SET
                            start_time = EXCLUDED.start_time,
                            end_time = EXCLUDED.end_time,
                            text = EXCLUDED.text,
                            is_chapter_start = EXCLUDED.is_chapter_start,
                            updated_at = EXCLUDED.updated_at
                    """),
                    {
                        "youtube_id": youtube_id,
                        "segment_index": idx,
                        "start_time": segment.start,
                        "end_time": segment.end,
                        "text": segment.text,
                        "is_chapter_start": bool(segment.is_chapter_start),
                        "created_at": now,
                        "updated_at": now,
                    },
                )
                count += 1
            session.execute(
                text("""
                    DELETE FROM transcript_segments
                    WHERE youtube_id = :youtube_id AND segment_index >= :count
                """),
                {"youtube_id": youtube_id, "count": count},
            )
        return count

    def count_for_video(self, youtube_id: str) -> int:
        with get_db_session() as session:
            value = session.execute(
                text("SELECT COUNT(*) FROM transcript_segments WHERE youtube_id = :youtube_id"),
                {"youtube_id": youtube_id},
            ).scalar()
        return int(value or 0)
