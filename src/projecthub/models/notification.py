"""In-app notification model."""

from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now


class Notification(SQLModel, table=True):
    """Notification delivered to ``recipient_id``, written in the same
    transaction as the workflow step that caused it."""

    __tablename__ = "notifications"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    recipient_id: UUID = Field(foreign_key="users.id", index=True)
    sender_id: UUID | None = Field(default=None, foreign_key="users.id")
    type: str = Field(max_length=50)
    title: str = Field(max_length=200)
    message: str | None = Field(default=None, max_length=1000)
    link: str | None = Field(default=None, max_length=500)
    read: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
