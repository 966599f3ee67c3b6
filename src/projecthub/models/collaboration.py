"""Collaboration model - an accepted contributor relationship."""

from datetime import datetime
from uuid import UUID, uuid7

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import DEFAULT_COLLABORATOR_ROLE


class Collaboration(SQLModel, table=True):
    """Accepted relationship between a project and a contributor.

    ``owner_id`` is a snapshot of the project owner when the row was
    written, not a live reference.
    """

    __tablename__ = "collaborations"
    __table_args__ = (
        sa.UniqueConstraint(
            "project_id", "collaborator_id", name="uq_collaborations_project_collaborator"
        ),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    owner_id: UUID = Field(foreign_key="users.id")
    collaborator_id: UUID = Field(foreign_key="users.id", index=True)
    role: str = Field(default=DEFAULT_COLLABORATOR_ROLE, max_length=100)
    contribution_summary: str = Field(default="", max_length=1000)
    request_id: UUID | None = Field(default=None, foreign_key="join_requests.id")
    started_at: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
