"""Project schemas for API request/response."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.projecthub.models.enums import DEFAULT_COLLABORATOR_ROLE, ProjectStatus
from src.projecthub.schemas.user import UserSummary


def _clean_tech_stack(v: list[str] | None) -> list[str] | None:
    if v is None:
        return None
    seen: list[str] = []
    for item in v:
        item = item.strip()
        if item and item not in seen:
            seen.append(item)
    return seen


class ContributorInput(BaseModel):
    """A contributor named explicitly when the project is created."""

    user_id: UUID
    role: str = Field(default=DEFAULT_COLLABORATOR_ROLE, min_length=1, max_length=100)
    contribution_summary: str = Field(default="", max_length=1000)


class ProjectCreate(BaseModel):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=5000)
    domain: str = Field(min_length=1, max_length=100)
    tech_stack: list[str] = Field(default_factory=list, max_length=30)
    status: ProjectStatus = ProjectStatus.ONGOING
    looking_for_contributors: bool = False
    project_photo: str | None = Field(default=None, max_length=500)
    github_url: str | None = Field(default=None, max_length=500)
    deployment_url: str | None = Field(default=None, max_length=500)
    demo_url: str | None = Field(default=None, max_length=500)
    contributors: list[ContributorInput] = Field(default_factory=list)

    @field_validator("title", "description", "domain")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be empty or whitespace only")
        return v

    @field_validator("tech_stack")
    @classmethod
    def validate_tech_stack(cls, v: list[str]) -> list[str]:
        return _clean_tech_stack(v) or []


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Owner and slug are not writable."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=5000)
    domain: str | None = Field(default=None, min_length=1, max_length=100)
    tech_stack: list[str] | None = Field(default=None, max_length=30)
    status: ProjectStatus | None = None
    looking_for_contributors: bool | None = None
    project_photo: str | None = Field(default=None, max_length=500)
    github_url: str | None = Field(default=None, max_length=500)
    deployment_url: str | None = Field(default=None, max_length=500)
    demo_url: str | None = Field(default=None, max_length=500)

    @field_validator("title", "description", "domain")
    @classmethod
    def validate_not_blank(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Field cannot be empty or whitespace only")
        return v

    @field_validator("tech_stack")
    @classmethod
    def validate_tech_stack(cls, v: list[str] | None) -> list[str] | None:
        return _clean_tech_stack(v)


class ProjectRead(BaseModel):
    """Plain project row, as returned right after a write."""

    id: UUID
    owner_id: UUID
    title: str
    slug: str
    description: str
    domain: str
    tech_stack: list[str]
    status: ProjectStatus
    looking_for_contributors: bool
    project_photo: str | None
    github_url: str | None
    deployment_url: str | None
    demo_url: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ContributorView(BaseModel):
    """Accepted collaborator as shown on a project card."""

    user_id: UUID
    username: str
    name: str
    profile_photo: str | None = None
    role: str
    contribution_summary: str = ""


class ProjectFeedItem(BaseModel):
    """Project enriched with owner, contributors and per-viewer reaction state."""

    id: UUID
    title: str
    slug: str
    description: str
    domain: str
    tech_stack: list[str]
    status: ProjectStatus
    looking_for_contributors: bool
    project_photo: str | None = None
    github_url: str | None = None
    deployment_url: str | None = None
    demo_url: str | None = None
    created_at: datetime
    updated_at: datetime
    owner: UserSummary
    contributors: list[ContributorView] = Field(default_factory=list)
    comment_count: int = 0
    like_count: int = 0
    liked_by_user: bool = False
    bookmarked_by_user: bool = False


class FeedPage(BaseModel):
    projects: list[ProjectFeedItem]
    next_cursor: str | None = None
