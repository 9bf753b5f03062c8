"""
Repository for per-call LLM token usage.
"""
import uuid
from typing import Any, Dict, List, Optional

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session, utc_now_iso


class TokenUsageRepository:
    def insert_usage(
        self,
        user_id: Optional[str],
        model: str,
        provider: str,
        operation: str,
        input_tokens: int = 0,
        output_tokens: int = 0,
        total_tokens: int = 0,
        video_id: Optional[str] = None,
        user_video_id: Optional[str] = None,
        request_duration_ms: Optional[int] = None,
    ) -> str:
        usage_id = str(uuid.uuid4())
        with get_db_session() as session:
            session.execute(
                text("""
                    INSERT INTO token_usage (
                        id, user_id, model, provider, operation, video_id, user_video_id,
                        input_tokens, output_tokens, total_tokens, request_duration_ms, created_at
                    ) VALUES (
                        :id, :user_id, :model, :provider, :operation, :video_id, :user_video_id,
                        :input_tokens, :output_tokens, :total_tokens, :request_duration_ms, :created_at
                    )
                """),
                {
                    "id": usage_id,
                    "user_id": str(user_id) if user_id is not None else None,
                    "model": model,
                    "provider": provider,
                    "operation": operation,
                    "video_id": video_id,
                    "user_video_id": str(user_video_id) if user_video_id is not None else None,
                    "input_tokens": int(input_tokens or 0),
                    "output_tokens": int(output_tokens or 0),
                    "total_tokens": int(total_tokens or 0),
                    "request_duration_ms": request_duration_ms,
                    "created_at": utc_now_iso(),
                },
            )
        return usage_id

    def list_for_user(self, user_id: str) -> List[Dict[str, Any]]:
        with get_db_session() as session:
            rows = session.execute(
                text("""
                    SELECT id, user_id, model, provider, operation, video_id, user_video_id,
                           input_tokens, output_tokens, total_tokens, request_duration_ms, created_at
                    FROM token_usage
                    WHERE user_id = :user_id
                    ORDER BY created_at ASC
                """),
                {"user_id": str(user_id)},
            ).mappings().fetchall()
        return [dict(row) for row in rows]
