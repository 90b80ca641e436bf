"""Database engine construction."""

from typing import Any

from sqlalchemy import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from src.portfolio.core.config import Settings


def _get_connect_args(settings: Settings) -> dict[str, Any]:
    """Get driver-level connection arguments, including timeouts."""
    url = make_url(settings.database_url)
    if url.get_backend_name() == "postgresql" and url.get_driver_name() == "asyncpg":
        return {
            "timeout": settings.database_timeout_seconds,
            "command_timeout": settings.database_timeout_seconds,
        }
    if url.get_backend_name() == "sqlite":
        return {"timeout": settings.database_timeout_seconds}
    return {}


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the application's async engine.

    The engine is owned by the application context and disposed on shutdown.
    """
    url = make_url(settings.database_url)
    kwargs: dict[str, Any] = {
        "pool_pre_ping": True,
        "connect_args": _get_connect_args(settings),
    }
    if url.get_backend_name() != "sqlite":
        kwargs["pool_size"] = settings.database_pool_size
        kwargs["max_overflow"] = settings.database_max_overflow
        kwargs["pool_timeout"] = settings.database_timeout_seconds
    return create_async_engine(settings.database_url, **kwargs)


def get_sync_url(settings: Settings) -> str:
    """Get a sync driver URL for Alembic (asyncpg -> psycopg2, aiosqlite -> pysqlite)."""
    return settings.database_url.replace("+asyncpg", "").replace("+aiosqlite", "")
