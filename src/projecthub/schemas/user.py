from uuid import UUID

from pydantic import BaseModel


class UserSummary(BaseModel):
    """Public identity shown next to projects, comments and requests."""

    id: UUID
    username: str
    name: str
    profile_photo: str | None = None

    model_config = {"from_attributes": True}
