# =============================================================================
# core/database.py - Engine and Session Management
# =============================================================================
# Builds the SQLAlchemy engine and session factory from settings and exposes:
# - get_db(): FastAPI dependency yielding one session per request
# - session_scope(): commit/rollback context manager for scripts
# - init_db() / drop_db(): create or drop all tables
#
# Usage:
#   from core.database import session_scope
#   with session_scope() as db:
#       db.add(user)
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Generator
from contextlib import contextmanager
from functools import lru_cache

from sqlalchemy import Engine, create_engine, text
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.config import settings
from core.orm import Base

logger = logging.getLogger(__name__)


def _engine_kwargs(db_url: str) -> dict[str, object]:
    kwargs: dict[str, object] = {"pool_pre_ping": True}
    if db_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        # In-memory databases live only as long as their connection
        if db_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    elif db_url.startswith("postgres"):
        kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    return kwargs


@lru_cache
def get_engine() -> Engine:
    """Create the process-wide engine on first use."""
    db_url = settings.DATABASE_URL
    engine = create_engine(db_url, **_engine_kwargs(db_url))
    logger.info(f"Database engine created ({engine.dialect.name})")
    return engine


@lru_cache
def get_sessionmaker() -> sessionmaker[Session]:
    return sessionmaker(
        bind=get_engine(),
        class_=Session,
        autoflush=False,
        expire_on_commit=False,
    )


def get_db() -> Generator[Session, None, None]:
    """
    Request-scoped session.

    Services commit their own writes; the session is always closed
    when the request finishes.
    """
    db = get_sessionmaker()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Non-request helper for scripts: yields a session and commits/rolls back.
    """
    db = get_sessionmaker()()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


def init_db() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(bind=get_engine())
    logger.info("Database tables ensured")


def drop_db() -> None:
    """Drop every table. Only used by tests and local resets."""
    Base.metadata.drop_all(bind=get_engine())


def check_connection() -> bool:
    """Run a trivial query; used by the readiness probe."""
    with get_engine().connect() as conn:
        conn.execute(text("SELECT 1"))
    return True
