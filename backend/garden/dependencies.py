"""FastAPI dependency injection."""

from __future__ import annotations

from collections.abc import Iterator

from sqlalchemy.orm import Session

from garden.config import Settings, settings


def get_settings() -> Settings:
    return settings


def get_session() -> Iterator[Session]:
    """One session per request, closed when the response is sent."""
    from garden.db.database import get_session_factory

    session = get_session_factory()()
    try:
        yield session
    finally:
        session.close()
