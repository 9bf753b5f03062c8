"""
YouTube identifier helpers shared by the video pipeline.
"""
import re
from typing import Optional

_YOUTUBE_VIDEO_ID_PATTERNS = [
    r"(?:youtube\.com/watch\?v=)([a-zA-Z0-9_-]{11})",
    r"(?:youtu\.be/)([a-zA-Z0-9_-]{11})",
    r"(?:youtube\.com/embed/)([a-zA-Z0-9_-]{11})",
]
_VIDEO_ID_RE = re.compile("|".join(f"({p})" for p in _YOUTUBE_VIDEO_ID_PATTERNS))
_BARE_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")


def extract_video_id(url_or_text: str) -> Optional[str]:
    """Extract a YouTube video ID from a URL, text containing a link, or a bare ID."""
    value = (url_or_text or "").strip()
    if _BARE_ID_RE.match(value):
        return value
    for m in _VIDEO_ID_RE.finditer(value):
        for g in m.groups():
            if g and _BARE_ID_RE.match(g):
                return g
    return None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"
