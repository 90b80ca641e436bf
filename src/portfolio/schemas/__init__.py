from src.portfolio.schemas.project import (
    MessageResponse,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
    ProjectWrite,
)
from src.portfolio.schemas.register import RegisterListResponse, RegisterRead

__all__ = [
    # Project
    "MessageResponse",
    "ProjectListResponse",
    "ProjectRead",
    "ProjectResponse",
    "ProjectWrite",
    # Register
    "RegisterListResponse",
    "RegisterRead",
]
