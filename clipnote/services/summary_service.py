"""
Free-text video summarization with usage accounting.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional

from clipnote.i18n.prompts import get_summary_prompt
from clipnote.llms.llm_gateway import LLMGateway
from clipnote.models.enums import LanguageCode
from clipnote.repositories.user_video_repo import UserVideoRepository
from clipnote.services.token_tracker import TokenTracker, UsageContext
from clipnote.services.video_pipeline.constants import SUMMARY_OPERATION
from clipnote.services.video_pipeline.providers import no_current_user
from clipnote.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class SummaryResult:
    summary: str
    language: LanguageCode
    model: str


class SummaryGenerator:
    def __init__(
        self,
        gateway: Optional[LLMGateway] = None,
        usage_sink: Optional[TokenTracker] = None,
        user_video_repo: Optional[UserVideoRepository] = None,
        current_user: Optional[Callable[[], str]] = None,
    ) -> None:
        self.gateway = gateway or LLMGateway()
        self.usage_sink = usage_sink or TokenTracker()
        self.user_video_repo = user_video_repo or UserVideoRepository()
        self.current_user = current_user or no_current_user

    def generate(
        self,
        text: str,
        language: LanguageCode,
        video_id: str,
        user_video_id: Optional[str] = None,
    ) -> SummaryResult:
        started = time.monotonic()
        result = self.gateway.generate_text(text, system_prompt=get_summary_prompt(language))
        duration_ms = int((time.monotonic() - started) * 1000)
        summary = str(result.parsed or "").strip()

        try:
            self.usage_sink.track(
                result,
                UsageContext(
                    user_id=self.current_user(),
                    model=result.model_name,
                    provider=result.provider,
                    operation=SUMMARY_OPERATION,
                    video_id=video_id,
                    user_video_id=user_video_id,
                    request_duration_ms=duration_ms,
                ),
            )
        except Exception as exc:
            logger.error("Failed to track summary token usage: %s", exc)

        if user_video_id and summary:
            self.user_video_repo.update_summary(user_video_id, summary)

        return SummaryResult(summary=summary, language=language, model=result.model_name)
