"""Repository layer - data access abstraction."""

from src.portfolio.repositories.base import BaseRepository, parse_id
from src.portfolio.repositories.project_repository import ProjectRepository
from src.portfolio.repositories.register_repository import RegisterRepository

__all__ = [
    "BaseRepository",
    "ProjectRepository",
    "RegisterRepository",
    "parse_id",
]
