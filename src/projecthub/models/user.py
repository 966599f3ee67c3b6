"""User model - public profile fields only; credentials live with the identity provider."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    username: str = Field(max_length=30, unique=True, index=True)
    name: str = Field(max_length=100)
    email: str = Field(max_length=255, unique=True, index=True)
    profile_photo: str | None = Field(default=None, max_length=500)
    summary: str | None = Field(default=None, max_length=1000)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
