"""Integration test fixtures for database and HTTP client operations.

The application runs against an in-memory SQLite database shared through a
single connection, and a local media store rooted in a per-test directory.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.portfolio.models  # noqa: F401 - registers tables on the metadata
from src.portfolio.core.config import Settings
from src.portfolio.core.context import AppContext
from src.portfolio.core.media import LocalMediaStore
from src.portfolio.main import create_app


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create an in-memory database with every table in place."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does NOT auto-commit. Tests must call `await session.commit()`
    to make their rows visible to requests served by the app.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
def media_store(settings: Settings) -> LocalMediaStore:
    return LocalMediaStore(settings.media_root, settings.media_url_prefix)


@pytest.fixture
async def context(
    settings: Settings, engine: AsyncEngine, media_store: LocalMediaStore
) -> AppContext:
    """Application context wired to the test engine and media directory."""
    app_context = AppContext(settings, engine, media_store)
    await app_context.startup()
    return app_context


@pytest.fixture
def app(settings: Settings, context: AppContext) -> FastAPI:
    application = create_app(settings)
    application.state.context = context
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client bound to the app (no lifespan; the context is preinstalled)."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
