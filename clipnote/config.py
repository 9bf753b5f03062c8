"""
Environment-driven configuration for the video pipeline.
"""
import os
from typing import Any, Dict

from dotenv import load_dotenv

DEFAULT_VIDEO_API_TIMEOUT_SECONDS = 20


def load_app_env() -> Dict[str, Any]:
    """
    Loads .env and returns the settings used by the metadata provider.
    Missing values are returned as empty strings; the provider decides whether that is fatal.
    """
    load_dotenv()

    timeout_raw = os.getenv("VIDEO_API_TIMEOUT_SECONDS", str(DEFAULT_VIDEO_API_TIMEOUT_SECONDS))
    try:
        timeout_seconds = int(timeout_raw)
    except ValueError:
        timeout_seconds = DEFAULT_VIDEO_API_TIMEOUT_SECONDS

    return {
        "VIDEO_API_BASE_URL": os.getenv("VIDEO_API_BASE_URL", "").rstrip("/"),
        "VIDEO_API_KEY": os.getenv("VIDEO_API_KEY", ""),
        "VIDEO_API_TIMEOUT_SECONDS": timeout_seconds,
    }
