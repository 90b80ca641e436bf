"""Repository for the Project entity."""

from typing import Any
from uuid import UUID

from src.portfolio.models import Project
from src.portfolio.models.base import utc_now
from src.portfolio.repositories.base import BaseRepository

REPLACEABLE_FIELDS = ("name", "description", "url", "image")


class ProjectRepository(BaseRepository[Project]):
    """Persistence boundary over the `projects` collection."""

    model = Project

    async def insert(self, project: Project) -> Project:
        """Insert a new project and return it with generated fields populated."""
        self.add(project)
        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def find_all_sorted(self) -> list[Project]:
        """All projects, newest first."""
        return await self.list_ordered(Project.created_at.desc())  # type: ignore[attr-defined]

    async def find_by_id(self, project_id: str | UUID) -> Project | None:
        return await self.get_by_id(project_id)

    async def replace_by_id(
        self, project_id: str | UUID, fields: dict[str, Any]
    ) -> Project | None:
        """Replace the business fields of a project.

        Returns the updated project, or None if it does not exist.
        """
        project = await self.get_by_id(project_id)
        if project is None:
            return None

        for field in REPLACEABLE_FIELDS:
            if field in fields:
                setattr(project, field, fields[field])
        # SQLModel has no onupdate hook, so the timestamp is set explicitly
        project.updated_at = utc_now()

        await self.session.flush()
        await self.session.refresh(project)
        return project

    async def delete_by_id(self, project_id: str | UUID) -> Project | None:
        """Delete a project and return the removed record (None if missing)."""
        project = await self.get_by_id(project_id)
        if project is None:
            return None

        await self.session.delete(project)
        await self.session.flush()
        return project
