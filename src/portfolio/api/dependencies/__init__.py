"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenient imports.
"""

from src.portfolio.api.dependencies.context import AppContextDep, get_app_context
from src.portfolio.api.dependencies.db import DBSession, get_db_session
from src.portfolio.api.dependencies.repositories import (
    ProjectRepo,
    RegisterRepo,
    get_project_repository,
    get_register_repository,
)
from src.portfolio.api.dependencies.services import (
    ProjectServiceDep,
    RegisterServiceDep,
    get_project_service,
    get_register_service,
)
from src.portfolio.api.dependencies.uploads import OptionalImage, get_image_upload

__all__ = [
    # Context
    "AppContextDep",
    "get_app_context",
    # Database
    "DBSession",
    "get_db_session",
    # Repositories
    "ProjectRepo",
    "RegisterRepo",
    "get_project_repository",
    "get_register_repository",
    # Services
    "ProjectServiceDep",
    "RegisterServiceDep",
    "get_project_service",
    "get_register_service",
    # Uploads
    "OptionalImage",
    "get_image_upload",
]
