"""Repository for admin Register records."""

from src.portfolio.models import Register
from src.portfolio.repositories.base import BaseRepository


class RegisterRepository(BaseRepository[Register]):
    model = Register

    async def find_all(self) -> list[Register]:
        return await self.list_ordered(Register.name)  # type: ignore[arg-type]
