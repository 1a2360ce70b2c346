"""Database configuration and session management.

This module initializes the SQLAlchemy engine, session factory,
and declarative base, and provides the request-scoped unit of work
used by the FastAPI routes.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .core import get_settings


settings = get_settings()


def _connect_args(url: str) -> dict:
    # SQLite connections are handed between the threadpool workers.
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.SQL_ECHO,
    future=True,
)
"""SQLAlchemy engine bound to the configured database URL."""


SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
    future=True,
)
"""Factory for database sessions."""


Base = declarative_base()
"""Declarative base class for SQLAlchemy models."""


def get_db():
    """
    Provide a SQLAlchemy database session for one request.

    Services commit their own writes before the response is built;
    anything left uncommitted when the request raises is rolled back.
    """

    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
