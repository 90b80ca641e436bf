"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.portfolio.api.dependencies.db import DBSession
from src.portfolio.repositories import ProjectRepository, RegisterRepository


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_register_repository(session: DBSession) -> RegisterRepository:
    return RegisterRepository(session)


ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
RegisterRepo = Annotated[RegisterRepository, Depends(get_register_repository)]
