from __future__ import annotations

from typing import Any, Callable, Optional, Protocol, Sequence

from clipnote.models.enums import LanguageCode
from clipnote.models.models import TranscriptSegment, Video
from clipnote.services.video_pipeline.language import LanguagePreferenceResolver
from clipnote.services.video_pipeline.providers import no_current_user


class Summarizer(Protocol):
    def generate(self, text: str, language: LanguageCode, video_id: str, user_video_id: Optional[str] = None) -> Any:
        ...


def build_summary_input(video: Video, segments: Sequence[TranscriptSegment]) -> str:
    transcript_text = " ".join(segment.text for segment in segments)
    return f"{video.title}\n{video.description or ''}\n{transcript_text}"


class SummaryOrchestrator:
    """Builds summarizer input and hands off; retries and validation belong to the summarizer."""

    def __init__(
        self,
        summarizer: Summarizer,
        language_resolver: Optional[LanguagePreferenceResolver] = None,
        current_user: Optional[Callable[[], str]] = None,
    ) -> None:
        self.summarizer = summarizer
        self.current_user = current_user or no_current_user
        self.language_resolver = language_resolver or LanguagePreferenceResolver(current_user=self.current_user)

    def summarize(
        self,
        video: Video,
        segments: Sequence[TranscriptSegment],
        user_video_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> Any:
        text = build_summary_input(video, segments)
        language = self.language_resolver.resolve(user_id)
        return self.summarizer.generate(text, language, video.youtube_id, user_video_id)
