"""Join request schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.projecthub.models.enums import JoinRequestStatus, RespondAction
from src.projecthub.schemas.user import UserSummary


class JoinRequestCreate(BaseModel):
    message: str | None = Field(default=None, max_length=1000)
    role_requested: str | None = Field(default=None, max_length=100)


class RespondRequest(BaseModel):
    action: RespondAction


class RespondOutcome(BaseModel):
    """Result of an owner decision on a join request."""

    request_id: UUID
    action: RespondAction
    status: JoinRequestStatus
    collaboration_id: UUID | None = None


class JoinRequestRead(BaseModel):
    id: UUID
    project_id: UUID
    requester_id: UUID
    message: str | None
    role_requested: str | None
    status: JoinRequestStatus
    reviewed_by: UUID | None = None
    reviewed_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class JoinRequestView(JoinRequestRead):
    """Join request with the project and requester it refers to."""

    project_title: str
    project_slug: str
    requester: UserSummary
