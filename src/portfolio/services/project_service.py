"""Project lifecycle service - validation, media handling and persistence."""

from uuid import UUID

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.portfolio.core.db import DATABASE_ERRORS
from src.portfolio.core.exceptions import (
    NotFoundError,
    PersistenceError,
    StorageError,
    ValidationError,
)
from src.portfolio.core.logging import get_logger
from src.portfolio.core.media import ImageUpload, MediaStore
from src.portfolio.models import Project
from src.portfolio.repositories import ProjectRepository
from src.portfolio.schemas.project import MISSING_FIELD, ProjectWrite

logger = get_logger(__name__)

IMAGE_NAMESPACE = "projects"


class ProjectService:
    """Create, read, update and delete projects.

    Every mutating operation runs as one sequence: validate, optionally talk
    to the media store, write to the database, then release media that is no
    longer referenced. Media releases are best-effort: a failure is logged
    and never changes the outcome of the operation.
    """

    def __init__(
        self,
        project_repo: ProjectRepository,
        media_store: MediaStore,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.media_store = media_store
        self.session = session

    @staticmethod
    def validate(
        name: str | None, description: str | None, url: str | None
    ) -> ProjectWrite:
        """Validate and normalize the writable fields.

        Missing fields get the generic "please provide" message; otherwise the
        message is the first field error.

        Raises:
            ValidationError: If a field is missing, blank, too long or the URL is malformed.
        """
        try:
            return ProjectWrite(name=name, description=description, url=url)  # type: ignore[arg-type]
        except SchemaValidationError as e:
            details = e.errors()
            errors = {
                ".".join(str(part) for part in err["loc"]): err["msg"].removeprefix(
                    "Value error, "
                )
                for err in details
            }
            message = None
            if not any(err["type"] == MISSING_FIELD for err in details):
                message = next(iter(errors.values()))
            raise ValidationError(message, error=errors) from e

    async def create_project(
        self,
        name: str | None,
        description: str | None,
        url: str | None,
        image: ImageUpload | None = None,
    ) -> Project:
        """Create a project, uploading its image first when one is given.

        Raises:
            ValidationError: Invalid fields; nothing is uploaded or persisted.
            StorageError: The image upload failed; nothing is persisted.
            PersistenceError: The insert failed; the uploaded image is released.
        """
        fields = self.validate(name, description, url)

        image_ref = ""
        if image is not None:
            image_ref = await self.media_store.store(image, IMAGE_NAMESPACE)

        project = Project(**fields.model_dump(), image=image_ref)
        try:
            project = await self.project_repo.insert(project)
            await self.session.commit()
        except DATABASE_ERRORS as e:
            await self._rollback()
            await self._release_image(image_ref, reason="create_failed")
            logger.error("Project insert failed", error=str(e))
            raise PersistenceError("Failed to save project") from e

        logger.info("Project created", project_id=str(project.id), has_image=bool(image_ref))
        return project

    async def list_projects(self) -> list[Project]:
        """All projects, newest first."""
        try:
            return await self.project_repo.find_all_sorted()
        except DATABASE_ERRORS as e:
            raise PersistenceError("Failed to fetch projects") from e

    async def get_project(self, project_id: str | UUID) -> Project:
        """Get a project by id.

        Raises:
            NotFoundError: No project has this id (malformed ids included).
        """
        try:
            project = await self.project_repo.find_by_id(project_id)
        except DATABASE_ERRORS as e:
            raise PersistenceError("Failed to fetch project") from e
        if project is None:
            raise NotFoundError()
        return project

    async def update_project(
        self,
        project_id: str | UUID,
        name: str | None,
        description: str | None,
        url: str | None,
        image: ImageUpload | None = None,
    ) -> Project:
        """Replace a project's fields, swapping its image when a new one is given.

        Without a new image the existing reference is kept. With one, the new
        file is uploaded before the write and the previous file is released
        after the write commits.

        Raises:
            ValidationError: Invalid fields.
            NotFoundError: No project has this id; checked before any upload.
            StorageError: The new image could not be uploaded.
            PersistenceError: The write failed; the new upload is released.
        """
        fields = self.validate(name, description, url)
        existing = await self.get_project(project_id)
        previous_image = existing.image

        new_image = previous_image
        if image is not None:
            new_image = await self.media_store.store(image, IMAGE_NAMESPACE)
        uploaded = new_image if image is not None else ""

        try:
            updated = await self.project_repo.replace_by_id(
                existing.id, {**fields.model_dump(), "image": new_image}
            )
            if updated is not None:
                await self.session.commit()
        except DATABASE_ERRORS as e:
            await self._rollback()
            await self._release_image(uploaded, reason="update_failed")
            logger.error("Project update failed", project_id=str(existing.id), error=str(e))
            raise PersistenceError("Failed to update project") from e

        if updated is None:
            # Deleted between the existence check and the write
            await self._release_image(uploaded, reason="update_target_vanished")
            raise NotFoundError()

        if uploaded and previous_image and previous_image != new_image:
            await self._release_image(previous_image, reason="replaced")

        logger.info(
            "Project updated", project_id=str(updated.id), image_replaced=bool(uploaded)
        )
        return updated

    async def delete_project(self, project_id: str | UUID) -> Project:
        """Delete a project, then release its image.

        Returns:
            The deleted project.

        Raises:
            NotFoundError: No project has this id.
            PersistenceError: The delete failed.
        """
        try:
            deleted = await self.project_repo.delete_by_id(project_id)
            if deleted is not None:
                await self.session.commit()
        except DATABASE_ERRORS as e:
            await self._rollback()
            raise PersistenceError("Failed to delete project") from e

        if deleted is None:
            raise NotFoundError()

        await self._release_image(deleted.image, reason="deleted")
        logger.info("Project deleted", project_id=str(deleted.id))
        return deleted

    async def _release_image(self, reference: str, reason: str) -> bool:
        """Release a media reference without letting failures escape.

        Returns:
            True if the reference was released (or there was nothing to release).
        """
        if not reference:
            return True
        try:
            await self.media_store.release(reference)
        except StorageError as e:
            logger.warning(
                "Image release failed",
                reference=reference,
                reason=reason,
                error=e.error or e.message,
            )
            return False
        return True

    async def _rollback(self) -> None:
        try:
            await self.session.rollback()
        except DATABASE_ERRORS as e:
            logger.warning("Rollback failed", error=str(e))
