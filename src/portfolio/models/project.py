"""Project model - the portfolio entry."""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.portfolio.models.base import utc_now


class Project(SQLModel, table=True):
    """A portfolio project stored in the `projects` collection."""

    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100)
    description: str = Field(max_length=1000)
    url: str = Field(max_length=2048)
    # Empty string when the project was created without an image
    image: str = Field(default="", max_length=2048)
    created_at: datetime = Field(default_factory=utc_now, index=True)
    updated_at: datetime = Field(default_factory=utc_now)
