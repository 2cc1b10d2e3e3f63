"""Database session factory and configuration.

Provides database connectivity and session management for the inquiry log.
"""

from contextlib import contextmanager
from functools import lru_cache
from typing import Generator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from .config import get_settings
from .models.base import Base


def create_db_engine(database_url: str) -> Engine:
    """Create an engine with settings suited to the backend.

    Pool settings only apply to server databases; in-memory SQLite gets a
    single shared connection so every session sees the same tables.
    """
    engine_kwargs = {
        "pool_pre_ping": True,  # Verify connections before using
        "echo": False,
    }

    if database_url.startswith("sqlite"):
        engine_kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            engine_kwargs["poolclass"] = StaticPool
    else:
        engine_kwargs["pool_size"] = 5
        engine_kwargs["max_overflow"] = 10

    return create_engine(database_url, **engine_kwargs)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@lru_cache()
def get_engine() -> Engine:
    return create_db_engine(get_settings().DATABASE_URL)


@lru_cache()
def get_session_factory() -> sessionmaker:
    return create_session_factory(get_engine())


def init_db(engine: Optional[Engine] = None) -> None:
    """Create missing tables."""
    Base.metadata.create_all(bind=engine or get_engine())


@contextmanager
def get_db_session(session_factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """Context manager for database sessions.

    Usage:
        with get_db_session() as session:
            session.add(Inquiry(text="...", created_at=now))

    Automatically commits on success, rolls back on exception.
    """
    session = (session_factory or get_session_factory())()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
