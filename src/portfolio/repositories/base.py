"""Base repository with common CRUD operations."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select


def parse_id(value: str | UUID) -> UUID | None:
    """Parse an id from a path parameter; malformed values map to None."""
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: str | UUID) -> ModelType | None:
        """Get a record by its primary key. Malformed ids are treated as missing."""
        parsed = parse_id(id)
        if parsed is None:
            return None
        result = await self.session.execute(
            select(self.model).where(self.model.id == parsed)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def list_ordered(self, order_by: Any) -> list[ModelType]:
        """Return every record ordered by the given clause."""
        result = await self.session.execute(select(self.model).order_by(order_by))
        return list(result.scalars().all())
