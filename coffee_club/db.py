"""
Database connection management.

Provides the engine, the session factory, and the FastAPI dependency that
yields a session per request.

Environment variables:
    - DATABASE_URL: SQLAlchemy connection URL (see config.py)
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session

from .config import DATABASE_URL
from .models import Base


def _connect_args(url: str) -> dict:
    # SQLite connections are shared with the worker threads used by the
    # dialog loader.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    connect_args=_connect_args(DATABASE_URL),
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency that yields a SQLAlchemy Session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_session_factory() -> sessionmaker:
    """
    FastAPI dependency returning the session factory itself.

    The dialog loader opens one session per concurrent read, so it needs the
    factory rather than a single request-scoped session.
    """
    return SessionLocal


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(bind=engine)
