"""Database utilities - engine and sessions."""

from src.portfolio.core.db.engine import create_engine, get_sync_url
from src.portfolio.core.db.session import (
    DATABASE_ERRORS,
    create_session_factory,
    get_session,
)

__all__ = [
    # Engine
    "create_engine",
    "get_sync_url",
    # Session
    "DATABASE_ERRORS",
    "create_session_factory",
    "get_session",
]
