"""Join request model - a contributor's pending ask to join a project."""

from datetime import datetime
from uuid import UUID, uuid7

import sqlalchemy as sa
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import JoinRequestStatus


class JoinRequest(SQLModel, table=True):
    """At most one PENDING row per (project, requester).

    The partial unique index only covers pending rows so resolved history
    is kept.
    """

    __tablename__ = "join_requests"
    __table_args__ = (
        sa.Index(
            "uq_join_requests_pending",
            "project_id",
            "requester_id",
            unique=True,
            postgresql_where=sa.text("status = 'pending'"),
        ),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    requester_id: UUID = Field(foreign_key="users.id", index=True)
    message: str | None = Field(default=None, max_length=1000)
    role_requested: str | None = Field(default=None, max_length=100)
    status: str = Field(default=JoinRequestStatus.PENDING.value, max_length=20, index=True)
    reviewed_by: UUID | None = Field(default=None, foreign_key="users.id")
    reviewed_at: datetime | None = Field(default=None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> JoinRequestStatus:
        return JoinRequestStatus(self.status)

    @property
    def is_pending(self) -> bool:
        return self.status == JoinRequestStatus.PENDING.value
