from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class TranscriptSegment:
    start: str            # "HH:MM:SS"
    end: str              # "HH:MM:SS"
    text: str
    is_chapter_start: bool = False


@dataclass(frozen=True)
class RawTranscriptEntry:
    text: str
    offset: float = 0.0    # seconds
    duration: float = 0.0  # seconds


@dataclass
class Video:
    youtube_id: str
    title: str
    description: Optional[str] = None
    channel_title: Optional[str] = None
    published_at: Optional[str] = None  # ISO8601
    thumbnail_url: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class UserVideo:
    id: str
    user_id: str
    youtube_id: str
    summary: str = ""
    quick_start_questions: Optional[List[str]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


@dataclass
class TranscriptResult:
    segments: List[TranscriptSegment] = field(default_factory=list)
    user_video: Optional[UserVideo] = None
    error: bool = False
    error_message: Optional[str] = None


@dataclass
class VideoDetails:
    title: str
    description: str
    channel_title: str
    published_at: Optional[str] = None
    thumbnails: Dict[str, Any] = field(default_factory=dict)
    tags: List[str] = field(default_factory=list)
    user_video: Optional[UserVideo] = None
    video: Optional[Video] = None
