"""
Token usage accounting for LLM calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from clipnote.repositories.usage_repo import TokenUsageRepository
from clipnote.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class UsageContext:
    user_id: Optional[str]
    model: str
    provider: str
    operation: str
    video_id: Optional[str] = None
    user_video_id: Optional[str] = None
    request_duration_ms: Optional[int] = None


class TokenTracker:
    def __init__(self, usage_repo: Optional[TokenUsageRepository] = None) -> None:
        self.repo = usage_repo or TokenUsageRepository()

    def track(self, result: Any, context: UsageContext) -> str:
        """Persist one usage row. Storage errors propagate; callers decide whether they matter."""
        usage = extract_usage(getattr(result, "raw", result))
        usage_id = self.repo.insert_usage(
            user_id=context.user_id,
            model=context.model,
            provider=context.provider,
            operation=context.operation,
            input_tokens=usage["input_tokens"],
            output_tokens=usage["output_tokens"],
            total_tokens=usage["total_tokens"],
            video_id=context.video_id,
            user_video_id=context.user_video_id,
            request_duration_ms=context.request_duration_ms,
        )
        logger.info(
            "llm_usage operation=%s model=%s input=%s output=%s duration_ms=%s",
            context.operation,
            context.model,
            usage["input_tokens"],
            usage["output_tokens"],
            context.request_duration_ms,
        )
        return usage_id


def extract_usage(message_obj: Any) -> Dict[str, int]:
    """Read token counts from a LangChain message; missing metadata counts as zero."""
    metadata = getattr(message_obj, "usage_metadata", None)
    if not isinstance(metadata, dict):
        response_metadata = getattr(message_obj, "response_metadata", None) or {}
        token_usage = response_metadata.get("token_usage") if isinstance(response_metadata, dict) else None
        metadata = {}
        if isinstance(token_usage, dict):
            metadata = {
                "input_tokens": token_usage.get("prompt_tokens"),
                "output_tokens": token_usage.get("completion_tokens"),
                "total_tokens": token_usage.get("total_tokens"),
            }
    input_tokens = int(metadata.get("input_tokens") or 0)
    output_tokens = int(metadata.get("output_tokens") or 0)
    total_tokens = int(metadata.get("total_tokens") or (input_tokens + output_tokens))
    return {
        "input_tokens": input_tokens,
        "output_tokens": output_tokens,
        "total_tokens": total_tokens,
    }
