"""Engine/session setup and startup initialization."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from garden.models.project import Base

logger = logging.getLogger(__name__)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def create_db_engine(database_url: str) -> Engine:
    """Create an engine; SQLite connections are shared across request threads."""
    url = make_url(database_url)
    kwargs: dict = {}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        database = url.database
        if not database or database == ":memory:":
            kwargs["poolclass"] = StaticPool
        else:
            Path(database).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(url, **kwargs)


def configure_database(database_url: str) -> Engine:
    """(Re)bind the module-level engine and session factory."""
    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = create_db_engine(database_url)
    _session_factory = sessionmaker(bind=_engine, expire_on_commit=False)
    logger.info("Database configured at %s", make_url(database_url).render_as_string(hide_password=True))
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        from garden.config import settings

        configure_database(settings.database_url)
    assert _engine is not None
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    if _session_factory is None:
        get_engine()
    assert _session_factory is not None
    return _session_factory


def init_db(seed_demo_data: bool = True, default_creator: str = "Anonymous Gardener") -> None:
    """Create the table, apply additive migrations, heal data, seed if empty."""
    from garden.db.migrations import heal_fruit_types, migrate_schema
    from garden.db.seed import seed_initial_data

    engine = get_engine()
    Base.metadata.create_all(engine)
    added = migrate_schema(engine)
    if added:
        logger.info("Added columns to projects: %s", ", ".join(added))

    with get_session_factory()() as session:
        healed = heal_fruit_types(session)
        if healed:
            logger.info("Corrected fruit type on %d project(s)", healed)
        if seed_demo_data:
            seed_initial_data(session, default_creator)
    logger.info("Projects table ready")
