"""Project model."""

from datetime import datetime
from uuid import UUID, uuid7

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Field, SQLModel

from src.projecthub.models.base import utc_now
from src.projecthub.models.enums import ProjectStatus


class Project(SQLModel, table=True):
    """A shared project.

    ``slug`` is always stored lowercase and is unique per owner; it is
    re-derived from ``title`` whenever the title changes. ``owner_id``
    never changes after creation.
    """

    __tablename__ = "projects"
    __table_args__ = (
        sa.UniqueConstraint("owner_id", "slug", name="uq_projects_owner_slug"),
        sa.Index("ix_projects_created_at_id", "created_at", "id"),
        sa.Index("ix_projects_tech_stack", "tech_stack", postgresql_using="gin"),
    )

    id: UUID = Field(default_factory=uuid7, primary_key=True)
    owner_id: UUID = Field(foreign_key="users.id", index=True)
    title: str = Field(max_length=200)
    slug: str = Field(max_length=120)
    description: str = Field(max_length=5000)
    domain: str = Field(max_length=100, index=True)
    tech_stack: list[str] = Field(
        default_factory=list,
        sa_column=sa.Column(
            ARRAY(sa.String(50)),
            nullable=False,
            server_default=sa.text("'{}'"),
        ),
    )
    status: str = Field(default=ProjectStatus.ONGOING.value, max_length=20)
    looking_for_contributors: bool = Field(default=False)
    project_photo: str | None = Field(default=None, max_length=500)
    github_url: str | None = Field(default=None, max_length=500)
    deployment_url: str | None = Field(default=None, max_length=500)
    demo_url: str | None = Field(default=None, max_length=500)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def status_enum(self) -> ProjectStatus:
        return ProjectStatus(self.status)
