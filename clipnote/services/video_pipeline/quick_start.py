"""
Suggested "quick start" questions generated from a video transcript.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, Field

from clipnote.i18n.prompts import get_quick_start_prompt
from clipnote.llms.llm_gateway import GenerationResult, LLMGateway
from clipnote.models.enums import LanguageCode
from clipnote.models.models import TranscriptSegment
from clipnote.repositories.user_video_repo import UserVideoRepository
from clipnote.services.token_tracker import TokenTracker, UsageContext
from clipnote.services.video_pipeline.constants import (
    QUICK_START_MAX_WORDS,
    QUICK_START_OPERATION,
    QUICK_START_TEMPERATURE,
)
from clipnote.services.video_pipeline.language import LanguagePreferenceResolver
from clipnote.services.video_pipeline.providers import no_current_user
from clipnote.utils.logger import get_logger

logger = get_logger(__name__)


class QuickStartQuestions(BaseModel):
    """Questions a viewer could ask to start exploring the video."""
    questions: List[str] = Field(default_factory=list)


def truncate_words(text: str, max_words: int = QUICK_START_MAX_WORDS) -> str:
    return " ".join(text.split()[:max_words])


def build_quick_start_prompt(
    language: LanguageCode,
    transcript: str,
    video_title: Optional[str] = None,
    video_description: Optional[str] = None,
) -> str:
    context = ""
    if video_title:
        context += f"Video Title: {video_title}\n"
    if video_description:
        context += f"Video Description: {video_description}\n"
    if context:
        context += "\n"
    return (
        f"{get_quick_start_prompt(language)}\n\n"
        f"{context}"
        "Here is the video transcript:\n\n"
        f"<transcript>\n{transcript}\n</transcript>\n"
    )


class QuickStartOrchestrator:
    def __init__(
        self,
        gateway: Optional[LLMGateway] = None,
        usage_sink: Optional[TokenTracker] = None,
        user_video_repo: Optional[UserVideoRepository] = None,
        language_resolver: Optional[LanguagePreferenceResolver] = None,
        current_user: Optional[Callable[[], str]] = None,
    ) -> None:
        self.gateway = gateway or LLMGateway()
        self.usage_sink = usage_sink or TokenTracker()
        self.user_video_repo = user_video_repo or UserVideoRepository()
        self.current_user = current_user or no_current_user
        self.language_resolver = language_resolver or LanguagePreferenceResolver(current_user=self.current_user)

    def generate_questions(
        self,
        segments: Sequence[TranscriptSegment],
        video_title: Optional[str] = None,
        video_description: Optional[str] = None,
        user_video_id: Optional[str] = None,
        video_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> List[str]:
        language = self.language_resolver.resolve(user_id)

        full_transcript = " ".join(segment.text for segment in segments)
        prompt = build_quick_start_prompt(
            language,
            truncate_words(full_transcript),
            video_title=video_title,
            video_description=video_description,
        )

        started = time.monotonic()
        result = self.gateway.generate_structured(
            prompt,
            QuickStartQuestions,
            model_name=self.gateway.quick_start_model,
            temperature=QUICK_START_TEMPERATURE,
        )
        duration_ms = int((time.monotonic() - started) * 1000)
        questions = _questions_from(result)

        self._track_usage(result, user_id, video_id, user_video_id, duration_ms)

        if user_video_id and questions:
            self.user_video_repo.update_quick_start_questions(user_video_id, questions)

        return questions

    def _track_usage(
        self,
        result: GenerationResult,
        user_id: Optional[str],
        video_id: Optional[str],
        user_video_id: Optional[str],
        duration_ms: int,
    ) -> None:
        try:
            self.usage_sink.track(
                result,
                UsageContext(
                    user_id=user_id if user_id is not None else self.current_user(),
                    model=result.model_name,
                    provider=result.provider,
                    operation=QUICK_START_OPERATION,
                    video_id=video_id,
                    user_video_id=user_video_id,
                    request_duration_ms=duration_ms,
                ),
            )
        except Exception as exc:
            logger.error("Failed to track quick start questions token usage: %s", exc)


def _questions_from(result: GenerationResult) -> List[str]:
    parsed = result.parsed
    if parsed is None:
        return []
    if isinstance(parsed, dict):
        items = parsed.get("questions") or []
    else:
        items = getattr(parsed, "questions", None) or []
    return [str(item) for item in items]
