"""
Repository for canonical video metadata, keyed by YouTube id.
"""
from typing import Any, Mapping, Optional

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session, utc_now_iso
from clipnote.models.models import Video

_VIDEO_COLUMNS = """
    youtube_id, title, description, channel_title, published_at,
    thumbnail_url, created_at, updated_at
"""


class VideoRepository:
    """Videos are upserted by youtube_id and never duplicated."""

    def get_by_youtube_id(self, youtube_id: str) -> Optional[Video]:
        with get_db_session() as session:
            row = session.execute(
                text(f"SELECT {_VIDEO_COLUMNS} FROM videos WHERE youtube_id = :youtube_id"),
                {"youtube_id": youtube_id},
            ).mappings().fetchone()
        if not row:
            return None
        return _row_to_video(row)

    def upsert(self, video: Video) -> Video:
        """Insert or update by youtube_id; returns the stored row."""
        now = utc_now_iso()
        with get_db_session() as session:
            session.execute(
                text("""
                    INSERT INTO videos (
                        youtube_id, title, description, channel_title, published_at,
                        thumbnail_url, created_at, updated_at
                    ) VALUES (
                        :youtube_id, :title, :description, :channel_title, :published_at,
                        :thumbnail_url, :created_at, :updated_at
                    )
                    ON CONFLICT (youtube_id) DO UPDATE SET
                        title = EXCLUDED.title,
                        description = COALESCE(EXCLUDED.description, videos.description),
                        channel_title = COALESCE(EXCLUDED.channel_title, videos.channel_title),
                        published_at = COALESCE(EXCLUDED.published_at, videos.published_at),
                        thumbnail_url = COALESCE(EXCLUDED.thumbnail_url, videos.thumbnail_url),
                        updated_at = EXCLUDED.updated_at
                """),
                {
                    "youtube_id": video.youtube_id,
                    "title": video.title,
                    "description": video.description,
                    "channel_title": video.channel_title,
                    "published_at": video.published_at,
                    "thumbnail_url": video.thumbnail_url,
                    "created_at": now,
                    "updated_at": now,
                },
            )
            row = session.execute(
                text(f"SELECT {_VIDEO_COLUMNS} FROM videos WHERE youtube_id = :youtube_id"),
                {"youtube_id": video.youtube_id},
            ).mappings().fetchone()
        return _row_to_video(row)


def _row_to_video(row: Mapping[str, Any]) -> Video:
    return Video(
        youtube_id=str(row["youtube_id"]),
        title=str(row["title"] or ""),
        description=row["description"],
        channel_title=row["channel_title"],
        published_at=row["published_at"],
        thumbnail_url=row["thumbnail_url"],
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
