import pytest

from clipnote.db import postgres_db
from clipnote.db.schema import ensure_schema


@pytest.fixture
def db(tmp_path, monkeypatch):
    """Fresh SQLite database per test, with the pipeline schema applied."""
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    monkeypatch.delenv("DATABASE_URL_PROD", raising=False)
    monkeypatch.delenv("DATABASE_URL_STAGING", raising=False)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'clipnote.db'}")
    postgres_db.reset_engine()
    ensure_schema()
    yield
    postgres_db.reset_engine()
