"""
Video transcript pipeline: normalization, caching, and AI-derived artifacts.
"""

from clipnote.services.video_pipeline.language import LanguagePreferenceResolver, resolve_preferred_language
from clipnote.services.video_pipeline.normalizer import is_chapter_start, normalize_transcript
from clipnote.services.video_pipeline.quick_start import QuickStartOrchestrator
from clipnote.services.video_pipeline.summary_orchestrator import SummaryOrchestrator
from clipnote.services.video_pipeline.transcript_service import TranscriptService
from clipnote.services.video_pipeline.video_service import VideoDetailsService

__all__ = [
    "LanguagePreferenceResolver",
    "QuickStartOrchestrator",
    "SummaryOrchestrator",
    "TranscriptService",
    "VideoDetailsService",
    "is_chapter_start",
    "normalize_transcript",
    "resolve_preferred_language",
]
