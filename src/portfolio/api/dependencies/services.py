"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.context import AppContextDep
from src.portfolio.api.dependencies.db import DBSession
from src.portfolio.api.dependencies.repositories import ProjectRepo, RegisterRepo
from src.portfolio.services import ProjectService, RegisterService


def get_project_service(
    project_repo: ProjectRepo,
    context: AppContextDep,
    session: DBSession,
) -> ProjectService:
    """Get project service wired to the shared media store."""
    return ProjectService(project_repo, context.media_store, session)


def get_register_service(register_repo: RegisterRepo) -> RegisterService:
    return RegisterService(register_repo)


ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
RegisterServiceDep = Annotated[RegisterService, Depends(get_register_service)]
