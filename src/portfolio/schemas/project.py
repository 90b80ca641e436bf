"""Project schemas for API request/response."""

import re
from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

# Scheme, a host with at least one dot-separated label, then anything.
# ASCII-only word characters: internationalized hosts are rejected.
URL_PATTERN = re.compile(r"^https?://[\w\-]+(\.[\w\-]+)+[/#?]?.*$", re.ASCII)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000
URL_MAX_LENGTH = 2048

# Error type for absent or blank fields, as opposed to malformed ones
MISSING_FIELD = "missing_field"


def _strip_required(v: Any, label: str, max_length: int) -> str:
    if v is None or (isinstance(v, str) and not v.strip()):
        raise PydanticCustomError(MISSING_FIELD, "{label} is required", {"label": label})
    if not isinstance(v, str):
        raise ValueError(f"{label} must be text")
    v = v.strip()
    if len(v) > max_length:
        raise ValueError(f"{label} must be at most {max_length} characters")
    return v


class ProjectWrite(BaseModel):
    """Fields accepted by create and update (full replace)."""

    name: str = Field(max_length=NAME_MAX_LENGTH)
    description: str = Field(max_length=DESCRIPTION_MAX_LENGTH)
    url: str = Field(max_length=URL_MAX_LENGTH)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        return _strip_required(v, "Project name", NAME_MAX_LENGTH)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> str:
        return _strip_required(v, "Project description", DESCRIPTION_MAX_LENGTH)

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, v: Any) -> str:
        v = _strip_required(v, "Project URL", URL_MAX_LENGTH)
        if not URL_PATTERN.match(v):
            raise ValueError("Please enter a valid URL")
        return v


class ProjectRead(BaseModel):
    """Schema for reading a project."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    name: str
    description: str
    url: str
    image: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")


class ProjectResponse(BaseModel):
    message: str
    project: ProjectRead


class ProjectListResponse(BaseModel):
    message: str
    projects: list[ProjectRead]


class MessageResponse(BaseModel):
    message: str
