"""
Cache-or-fetch access to video metadata.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from clipnote.db.postgres_db import utc_now_iso
from clipnote.models.models import Video, VideoDetails
from clipnote.repositories.user_video_repo import UserVideoRepository
from clipnote.repositories.video_repo import VideoRepository
from clipnote.services.video_pipeline.constants import (
    NEW_VIDEO_THUMBNAIL_KEYS,
    PLACEHOLDER_DESCRIPTION,
    REFRESH_THUMBNAIL_KEYS,
    UNKNOWN_CHANNEL,
)
from clipnote.services.video_pipeline.providers import HttpVideoMetadataProvider, VideoMetadataProvider
from clipnote.utils.logger import get_logger
from clipnote.utils.youtube_utils import extract_video_id

logger = get_logger(__name__)


class VideoDetailsService:
    def __init__(
        self,
        metadata_provider: Optional[VideoMetadataProvider] = None,
        video_repo: Optional[VideoRepository] = None,
        user_video_repo: Optional[UserVideoRepository] = None,
    ) -> None:
        self.provider = metadata_provider or HttpVideoMetadataProvider()
        self.video_repo = video_repo or VideoRepository()
        self.user_video_repo = user_video_repo or UserVideoRepository()

    def fetch_video_details(self, video_id: str, user_id: str) -> VideoDetails:
        """
        Stored metadata first, provider second, placeholder on any failure.

        Stored rows that were saved from a placeholder ("Unknown Channel") are
        refreshed from the provider before being returned.
        """
        video_id = extract_video_id(video_id) or video_id
        try:
            existing = self.video_repo.get_by_youtube_id(video_id)
            user_video = self.user_video_repo.get_by_user_and_youtube_id(user_id, video_id)

            if existing:
                if existing.channel_title == UNKNOWN_CHANNEL:
                    data = self.provider.fetch(video_id)
                    existing = self.video_repo.upsert(
                        _video_from_payload(video_id, data, REFRESH_THUMBNAIL_KEYS, default_thumbnail=None)
                    )
                return VideoDetails(
                    title=existing.title,
                    description=existing.description or "",
                    channel_title=existing.channel_title or "",
                    published_at=existing.published_at,
                    thumbnails={"high": {"url": existing.thumbnail_url or ""}},
                    tags=[],
                    user_video=user_video,
                    video=existing,
                )

            data = self.provider.fetch(video_id)
            video = self.video_repo.upsert(
                _video_from_payload(video_id, data, NEW_VIDEO_THUMBNAIL_KEYS, default_thumbnail="")
            )
            return VideoDetails(
                title=str(data.get("title") or ""),
                description=str(data.get("description") or ""),
                channel_title=str(data.get("channelTitle") or ""),
                published_at=data.get("publishedAt"),
                thumbnails=data.get("thumbnails") or {},
                tags=list(data.get("tags") or []),
                user_video=user_video,
                video=video,
            )
        except Exception:
            logger.exception("Error fetching video details for %s", video_id)
            return placeholder_details(video_id)


def placeholder_details(video_id: str) -> VideoDetails:
    return VideoDetails(
        title=f"Video {video_id}",
        description=PLACEHOLDER_DESCRIPTION,
        channel_title=UNKNOWN_CHANNEL,
        published_at=utc_now_iso(),
        thumbnails={},
        tags=[],
        user_video=None,
    )


def pick_thumbnail(thumbnails: Optional[Dict[str, Any]], keys: Iterable[str]) -> Optional[str]:
    for key in keys:
        entry = (thumbnails or {}).get(key) or {}
        url = entry.get("url") if isinstance(entry, dict) else None
        if url:
            return str(url)
    return None


def _video_from_payload(
    video_id: str,
    data: Dict[str, Any],
    thumbnail_keys: Iterable[str],
    default_thumbnail: Optional[str],
) -> Video:
    thumbnail = pick_thumbnail(data.get("thumbnails"), thumbnail_keys)
    return Video(
        youtube_id=video_id,
        title=str(data.get("title") or f"Video {video_id}"),
        description=data.get("description"),
        channel_title=data.get("channelTitle"),
        published_at=data.get("publishedAt") or None,
        thumbnail_url=thumbnail if thumbnail is not None else default_thumbnail,
    )
