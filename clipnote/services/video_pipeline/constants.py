"""
Constants for the video transcript pipeline.
"""

# Provider text for entries that carry no caption content.
NA_SENTINEL = "N/A"

# Chapter heuristic: short entries on every Nth position. Known to be rough.
CHAPTER_MAX_CHARS = 30
CHAPTER_INTERVAL = 10
CHAPTER_EXCLUDED_SUBSTRING = "segment"

# Upper bound on transcript words sent to the quick-start model.
QUICK_START_MAX_WORDS = 6000
# The quick-start model only accepts temperature=1.
QUICK_START_TEMPERATURE = 1.0
QUICK_START_OPERATION = "quick_start_questions"
SUMMARY_OPERATION = "summary"

TRANSCRIPT_UNAVAILABLE_MESSAGE = "Transcript not available for this video"

UNKNOWN_CHANNEL = "Unknown Channel"
PLACEHOLDER_DESCRIPTION = "Unable to load video description."

REFRESH_THUMBNAIL_KEYS = ("high", "medium", "default")
NEW_VIDEO_THUMBNAIL_KEYS = ("maxres", "standard", "high", "medium", "default")
