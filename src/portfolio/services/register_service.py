"""Register service - admin account listing."""

from src.portfolio.core.db import DATABASE_ERRORS
from src.portfolio.core.exceptions import PersistenceError
from src.portfolio.models import Register
from src.portfolio.repositories import RegisterRepository


class RegisterService:
    def __init__(self, register_repo: RegisterRepository):
        self.register_repo = register_repo

    async def list_users(self) -> list[Register]:
        """Get every admin record."""
        try:
            return await self.register_repo.find_all()
        except DATABASE_ERRORS as e:
            raise PersistenceError("Failed to fetch users") from e
