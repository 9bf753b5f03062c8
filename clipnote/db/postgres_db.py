from __future__ import annotations

import os
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def get_database_url() -> str:
    """
    Get database connection URL from environment.

    Determines environment from ENVIRONMENT variable:
    - 'production' or 'prod' -> DATABASE_URL_PROD
    - 'staging' or 'stage' -> DATABASE_URL_STAGING
    - default -> DATABASE_URL_STAGING (for safety)

    Falls back to DATABASE_URL if specific env vars not set.
    """
    env = os.getenv("ENVIRONMENT", "").lower()

    if env in ("production", "prod"):
        url = os.getenv("DATABASE_URL_PROD")
        if url:
            return url

    if env in ("staging", "stage") or not env:
        url = os.getenv("DATABASE_URL_STAGING")
        if url:
            return url

    url = os.getenv("DATABASE_URL")
    if url:
        return url

    raise ValueError(
        "No database URL found. Set DATABASE_URL_PROD, DATABASE_URL_STAGING, or DATABASE_URL"
    )


# Global engine and session factory (lazy initialization)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def get_engine() -> Engine:
    """Get or create SQLAlchemy engine with connection pooling."""
    global _engine
    if _engine is None:
        database_url = get_database_url()
        if database_url.startswith("sqlite"):
            # SQLite uses its own pool classes; pool sizing arguments do not apply.
            _engine = create_engine(database_url, echo=False)
        else:
            _engine = create_engine(
                database_url,
                pool_size=10,
                max_overflow=20,
                pool_pre_ping=True,  # Verify connections before using
                pool_recycle=3600,  # Recycle connections after 1 hour
                echo=False,
            )
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=get_engine(),
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def reset_engine() -> None:
    """Dispose the cached engine so the next session picks up a new DATABASE_URL."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


@contextmanager
def get_db_session() -> Iterator[Session]:
    """
    Context manager for database sessions.

    Automatically commits on success, rolls back on exception.
    """
    SessionLocal = get_session_factory()
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
