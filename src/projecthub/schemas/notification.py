from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.projecthub.models.enums import NotificationType


class NotificationRead(BaseModel):
    id: UUID
    sender_id: UUID | None
    type: NotificationType
    title: str
    message: str | None
    link: str | None
    read: bool
    created_at: datetime

    model_config = {"from_attributes": True}
