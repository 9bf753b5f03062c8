"""
Collaborator contracts for the video pipeline and their default implementations.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional, Protocol

import requests
from youtube_transcript_api import NoTranscriptFound, TranscriptsDisabled, YouTubeTranscriptApi

from clipnote.config import load_app_env
from clipnote.models.models import RawTranscriptEntry
from clipnote.services.video_pipeline.errors import NoCurrentUser, ProviderUnavailable
from clipnote.services.video_pipeline.normalizer import coerce_entry
from clipnote.utils.logger import get_logger
from clipnote.utils.youtube_utils import watch_url

logger = get_logger(__name__)


class VideoMetadataProvider(Protocol):
    def fetch(self, video_id: str) -> Dict[str, Any]:
        ...


class TranscriptProvider(Protocol):
    def fetch(self, video_id: str) -> List[RawTranscriptEntry]:
        ...


class HttpVideoMetadataProvider:
    """Video details from the internal metadata API (GET /youtube/video?videoUrl=...)."""

    def __init__(self, cfg: Optional[Dict[str, Any]] = None, session: Optional[requests.Session] = None) -> None:
        cfg = cfg if cfg is not None else load_app_env()
        self.base_url = str(cfg.get("VIDEO_API_BASE_URL") or "").rstrip("/")
        self.api_key = str(cfg.get("VIDEO_API_KEY") or "")
        self.timeout_seconds = int(cfg.get("VIDEO_API_TIMEOUT_SECONDS") or 20)
        self.session = session or requests.Session()

    def fetch(self, video_id: str) -> Dict[str, Any]:
        if not self.base_url:
            raise ProviderUnavailable("VIDEO_API_BASE_URL is not configured")
        try:
            response = self.session.get(
                f"{self.base_url}/youtube/video",
                params={"videoUrl": watch_url(video_id)},
                headers={"X-API-Key": self.api_key},
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ProviderUnavailable(f"Failed to fetch video details: {exc}") from exc
        if not response.ok:
            raise ProviderUnavailable(
                f"Failed to fetch video details: {response.status_code} {response.reason}"
            )
        return response.json()


class YouTubeTranscriptProvider:
    """
    Transcript snippets via youtube-transcript-api.

    `languages` are tried first; when none of them exist the first track the
    video offers is used, whatever its language.
    """

    def __init__(self, client: Optional[YouTubeTranscriptApi] = None, languages: Optional[List[str]] = None) -> None:
        self.client = client or YouTubeTranscriptApi()
        self.languages = languages or ["en", "id"]

    def fetch(self, video_id: str) -> List[RawTranscriptEntry]:
        try:
            transcript = self._fetch_transcript(video_id)
        except (NoTranscriptFound, TranscriptsDisabled) as exc:
            logger.info("No transcript for video %s: %s", video_id, type(exc).__name__)
            return []
        except Exception as exc:
            raise ProviderUnavailable(f"Transcript fetch failed for {video_id}: {exc}") from exc
        if transcript is None:
            logger.info("No transcript tracks listed for video %s", video_id)
            return []
        return [coerce_entry(snippet) for snippet in transcript]

    def _fetch_transcript(self, video_id: str) -> Optional[Iterable[Any]]:
        try:
            return self.client.fetch(video_id, languages=self.languages)
        except NoTranscriptFound:
            available = list(self.client.list(video_id))
            if not available:
                return None
            track = available[0]
            logger.info(
                "No %s transcript for video %s, using %s track",
                "/".join(self.languages),
                video_id,
                getattr(track, "language_code", "unknown"),
            )
            return track.fetch()


def no_current_user() -> str:
    raise NoCurrentUser("No user is attached to this request")
