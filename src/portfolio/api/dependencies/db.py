"""Database session dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.api.dependencies.context import AppContextDep
from src.portfolio.core.db import get_session


async def get_db_session(context: AppContextDep) -> AsyncGenerator[AsyncSession]:
    """Get a request-scoped database session."""
    async with get_session(context.session_factory) as session:
        yield session


DBSession = Annotated[AsyncSession, Depends(get_db_session)]
