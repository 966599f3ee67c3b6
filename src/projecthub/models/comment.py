from datetime import datetime
from uuid import UUID, uuid7

from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now


class Comment(SQLModel, table=True):
    __tablename__ = "comments"

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    user_id: UUID = Field(foreign_key="users.id", index=True)
    content: str = Field(max_length=2000)
    created_at: datetime = Field(default_factory=utc_now)
