# time_utils.py
from typing import Optional


def format_clock(seconds: Optional[float]) -> str:
    """Convert an offset in seconds to a zero-padded HH:MM:SS clock string.

    Fractions are truncated. Hours keep counting past 24 instead of wrapping,
    so long recordings still produce ordered start/end values.
    """
    secs = max(0, int(seconds or 0))
    h, rest = divmod(secs, 3600)
    m, s = divmod(rest, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_short_time(seconds: Optional[float]) -> str:
    """Short human form: '0:05', '1:05', '1:01:05'."""
    secs = max(0, int(seconds or 0))
    if secs < 3600:
        m, s = divmod(secs, 60)
        return f"{m}:{s:02d}"
    h, rest = divmod(secs, 3600)
    m, s = divmod(rest, 60)
    return f"{h}:{m:02d}:{s:02d}"


def clock_to_seconds(value: Optional[str]) -> int:
    """Parse 'HH:MM:SS' (or 'MM:SS') back to seconds. Unparseable values sort first."""
    parts = str(value or "").strip().split(":")
    try:
        numbers = [int(part) for part in parts]
    except ValueError:
        return 0
    total = 0
    for number in numbers:
        total = total * 60 + number
    return total
