"""Process-wide application context.

Holds the long-lived resources shared by every request: the database engine,
its session factory and the media store. Built once in the application
lifespan and torn down on shutdown.
"""

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from src.portfolio.core.config import Settings
from src.portfolio.core.db import create_engine, create_session_factory
from src.portfolio.core.logging import get_logger
from src.portfolio.core.media import MediaStore, build_media_store

logger = get_logger(__name__)


class AppContext:
    def __init__(self, settings: Settings, engine: AsyncEngine, media_store: MediaStore):
        self.settings = settings
        self.engine = engine
        self.media_store = media_store
        self.session_factory: async_sessionmaker[AsyncSession] = create_session_factory(engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "AppContext":
        return cls(settings, create_engine(settings), build_media_store(settings))

    async def startup(self) -> None:
        await self.media_store.prepare()
        logger.info(
            "Application context ready",
            media_backend=self.settings.media_backend,
            database=self.engine.url.render_as_string(hide_password=True),
        )

    async def shutdown(self) -> None:
        """Dispose the database engine. Call during shutdown."""
        await self.engine.dispose()
        logger.info("Application context closed")
