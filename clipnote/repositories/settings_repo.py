from typing import Optional

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session, utc_now_iso


class SettingsRepository:
    """User preferences stored on the users table."""

    def get_preferred_language(self, user_id: str) -> Optional[str]:
        """Raw stored value; validation is the caller's concern."""
        with get_db_session() as session:
            row = session.execute(
                text("SELECT language FROM users WHERE user_id = :user_id LIMIT 1"),
                {"user_id": str(user_id)},
            ).fetchone()
        if not row:
            return None
        return row[0]

    def set_preferred_language(self, user_id: str, language: Optional[str]) -> None:
        now = utc_now_iso()
        with get_db_session() as session:
            session.execute(
                text("""
                    INSERT INTO users (user_id, language, created_at, updated_at)
                    VALUES (:user_id, :language, :now, :now)
                    ON CONFLICT (user_id) DO UPDATE SET
                        language = EXCLUDED.language,
                        updated_at = EXCLUDED.updated_at
                """),
                {"user_id": str(user_id), "language": language, "now": now},
            )
