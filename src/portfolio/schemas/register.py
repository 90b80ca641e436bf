"""Register schemas - admin listing."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict


class RegisterRead(BaseModel):
    """Public view of an admin record (password is never exposed)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    email: str


class RegisterListResponse(BaseModel):
    message: str
    users: list[RegisterRead]
