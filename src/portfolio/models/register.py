"""Register model - admin accounts, read-only from the API."""

from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel


class Register(SQLModel, table=True):
    __tablename__ = "registers"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200)
    email: str = Field(max_length=320)
    # Never serialized; see RegisterRead
    password: str = Field(max_length=255)
