"""Project endpoints - portfolio CRUD with optional image upload.

Create and update accept multipart form data: `projectName`, `description`,
`url` and an optional `image` file.
"""

from typing import Annotated

from fastapi import APIRouter, Form, status

from src.portfolio.api.dependencies import OptionalImage, ProjectServiceDep
from src.portfolio.core.logging import bind_project_context
from src.portfolio.schemas.project import (
    MessageResponse,
    ProjectListResponse,
    ProjectRead,
    ProjectResponse,
)

router = APIRouter(prefix="/projects", tags=["projects"])

ProjectNameForm = Annotated[str | None, Form(alias="projectName")]
DescriptionForm = Annotated[str | None, Form()]
UrlForm = Annotated[str | None, Form()]


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
        400: {"description": "Missing or invalid fields, or unsupported image"},
        500: {"description": "Storage or database failure"},
    },
)
async def create_project(
    project_service: ProjectServiceDep,
    image: OptionalImage,
    project_name: ProjectNameForm = None,
    description: DescriptionForm = None,
    url: UrlForm = None,
) -> ProjectResponse:
    """Create a new project, uploading its image when one is attached."""
    project = await project_service.create_project(project_name, description, url, image)
    return ProjectResponse(
        message="Project uploaded successfully",
        project=ProjectRead.model_validate(project),
    )


@router.get(
    "",
    response_model=ProjectListResponse,
    summary="List projects",
    description="List every project, newest first.",
)
async def list_projects(project_service: ProjectServiceDep) -> ProjectListResponse:
    projects = await project_service.list_projects()
    return ProjectListResponse(
        message="Projects fetched successfully",
        projects=[ProjectRead.model_validate(p) for p in projects],
    )


@router.get(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
async def get_project(project_id: str, project_service: ProjectServiceDep) -> ProjectResponse:
    bind_project_context(project_id)
    project = await project_service.get_project(project_id)
    return ProjectResponse(
        message="Project fetched successfully",
        project=ProjectRead.model_validate(project),
    )


@router.put(
    "/{project_id}",
    response_model=ProjectResponse,
    summary="Update project",
    description="Replace name, description and URL; replace the image only when one is sent.",
    responses={
        400: {"description": "Missing or invalid fields, or unsupported image"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: str,
    project_service: ProjectServiceDep,
    image: OptionalImage,
    project_name: ProjectNameForm = None,
    description: DescriptionForm = None,
    url: UrlForm = None,
) -> ProjectResponse:
    bind_project_context(project_id)
    project = await project_service.update_project(
        project_id, project_name, description, url, image
    )
    return ProjectResponse(
        message="Project updated successfully",
        project=ProjectRead.model_validate(project),
    )


@router.delete(
    "/{project_id}",
    response_model=MessageResponse,
    summary="Delete project",
    responses={404: {"description": "Project not found"}},
)
async def delete_project(project_id: str, project_service: ProjectServiceDep) -> MessageResponse:
    """Delete a project and release its image."""
    bind_project_context(project_id)
    await project_service.delete_project(project_id)
    return MessageResponse(message="Project deleted successfully")
