"""Like and bookmark sets, stored as junction tables."""

from datetime import datetime
from uuid import UUID

from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now


class ProjectLike(SQLModel, table=True):
    """Membership of a user in a project's likes set."""

    __tablename__ = "project_likes"

    project_id: UUID = Field(foreign_key="projects.id", primary_key=True)
    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)


class Bookmark(SQLModel, table=True):
    """Membership of a project in a user's bookmark set."""

    __tablename__ = "bookmarks"

    user_id: UUID = Field(foreign_key="users.id", primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", primary_key=True, index=True)
    created_at: datetime = Field(default_factory=utc_now)
