"""
Repository for per-(user, video) records holding generated summaries and quick-start questions.
"""
import json
import uuid
from typing import Any, List, Mapping, Optional

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session, utc_now_iso
from clipnote.models.models import UserVideo

_USER_VIDEO_COLUMNS = "id, user_id, youtube_id, summary, quick_start_questions, created_at, updated_at"


class UserVideoRepository:
    """One row per (user_id, youtube_id), guaranteed by uq_user_videos_user_video."""

    def get_by_id(self, user_video_id: str) -> Optional[UserVideo]:
        with get_db_session() as session:
            row = session.execute(
                text(f"SELECT {_USER_VIDEO_COLUMNS} FROM user_videos WHERE id = :id"),
                {"id": str(user_video_id)},
            ).mappings().fetchone()
        return _row_to_user_video(row) if row else None

    def get_by_user_and_youtube_id(self, user_id: str, youtube_id: str) -> Optional[UserVideo]:
        with get_db_session() as session:
            row = session.execute(
                text(f"""
                    SELECT {_USER_VIDEO_COLUMNS}
                    FROM user_videos
                    WHERE user_id = :user_id AND youtube_id = :youtube_id
                """),
                {"user_id": str(user_id), "youtube_id": youtube_id},
            ).mappings().fetchone()
        return _row_to_user_video(row) if row else None

    def get_or_create(self, user_id: str, youtube_id: str, summary: str = "") -> UserVideo:
        """
        Insert-if-absent then read back, in one session.

        Concurrent callers race on the unique constraint; the loser's insert is a no-op
        and both read the same row.
        """
        now = utc_now_iso()
        with get_db_session() as session:
            session.execute(
                text("""
                    INSERT INTO user_videos (id, user_id, youtube_id, summary, created_at, updated_at)
                    VALUES (:id, :user_id, :youtube_id, :summary, :created_at, :updated_at)
                    ON CONFLICT (user_id, youtube_id) DO NOTHING
                """),
                {
                    "id": str(uuid.uuid4()),
                    "user_id": str(user_id),
                    "youtube_id": youtube_id,
                    "summary": summary or "",
                    "created_at": now,
                    "updated_at": now,
                },
            )
            row = session.execute(
                text(f"""
                    SELECT {_USER_VIDEO_COLUMNS}
                    FROM user_videos
                    WHERE user_id = :user_id AND youtube_id = :youtube_id
                """),
                {"user_id": str(user_id), "youtube_id": youtube_id},
            ).mappings().fetchone()
        return _row_to_user_video(row)

    def update_summary(self, user_video_id: str, summary: str) -> None:
        with get_db_session() as session:
            session.execute(
                text("UPDATE user_videos SET summary = :summary, updated_at = :updated_at WHERE id = :id"),
                {"id": str(user_video_id), "summary": summary or "", "updated_at": utc_now_iso()},
            )

    def update_quick_start_questions(self, user_video_id: str, questions: List[str]) -> None:
        """Overwrite the stored question list."""
        with get_db_session() as session:
            session.execute(
                text("""
                    UPDATE user_videos
                    SET quick_start_questions = :questions, updated_at = :updated_at
                    WHERE id = :id
                """),
                {
                    "id": str(user_video_id),
                    "questions": json.dumps(list(questions)),
                    "updated_at": utc_now_iso(),
                },
            )

    def count_for_user(self, user_id: str) -> int:
        with get_db_session() as session:
            value = session.execute(
                text("SELECT COUNT(*) FROM user_videos WHERE user_id = :user_id"),
                {"user_id": str(user_id)},
            ).scalar()
        return int(value or 0)


def _row_to_user_video(row: Mapping[str, Any]) -> UserVideo:
    questions = row["quick_start_questions"]
    if isinstance(questions, str):
        try:
            questions = json.loads(questions)
        except ValueError:
            questions = None
    if questions is not None and not isinstance(questions, list):
        questions = None
    return UserVideo(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        youtube_id=str(row["youtube_id"]),
        summary=str(row["summary"] or ""),
        quick_start_questions=questions,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )
