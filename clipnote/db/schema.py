"""
Idempotent DDL for the video pipeline tables.

The statements stick to types and constraints shared by PostgreSQL and SQLite
so the same schema backs production and local test databases.
"""

from __future__ import annotations

from typing import List

from sqlalchemy import text

from clipnote.db.postgres_db import get_db_session

SCHEMA_STATEMENTS: List[str] = [
    """
    CREATE TABLE IF NOT EXISTS users (
        user_id TEXT PRIMARY KEY,
        language TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS videos (
        youtube_id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        channel_title TEXT,
        published_at TEXT,
        thumbnail_url TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS transcript_segments (
        youtube_id TEXT NOT NULL,
        segment_index INTEGER NOT NULL,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        text TEXT NOT NULL,
        is_chapter_start BOOLEAN NOT NULL DEFAULT FALSE,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        PRIMARY KEY (youtube_id, segment_index)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS user_videos (
        id TEXT PRIMARY KEY,
        user_id TEXT NOT NULL,
        youtube_id TEXT NOT NULL,
        summary TEXT NOT NULL DEFAULT '',
        quick_start_questions TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL,
        CONSTRAINT uq_user_videos_user_video UNIQUE (user_id, youtube_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS token_usage (
        id TEXT PRIMARY KEY,
        user_id TEXT,
        model TEXT NOT NULL,
        provider TEXT NOT NULL,
        operation TEXT NOT NULL,
        video_id TEXT,
        user_video_id TEXT,
        input_tokens INTEGER NOT NULL DEFAULT 0,
        output_tokens INTEGER NOT NULL DEFAULT 0,
        total_tokens INTEGER NOT NULL DEFAULT 0,
        request_duration_ms INTEGER,
        created_at TEXT NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS ix_token_usage_user_created ON token_usage (user_id, created_at)",
]


def ensure_schema() -> None:
    with get_db_session() as session:
        for statement in SCHEMA_STATEMENTS:
            session.execute(text(statement))
