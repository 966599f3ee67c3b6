"""Notification service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Notification, NotificationType
from src.projecthub.repositories import NotificationRepository

logger = get_logger(__name__)


def queue_notification(
    notification_repo: NotificationRepository,
    recipient_id: UUID,
    type: NotificationType,
    title: str,
    message: str | None = None,
    link: str | None = None,
    sender_id: UUID | None = None,
) -> Notification:
    """Stage a notification in the caller's transaction (no commit)."""
    notification = Notification(
        recipient_id=recipient_id,
        sender_id=sender_id,
        type=type.value,
        title=title,
        message=message,
        link=link,
    )
    notification_repo.add(notification)
    return notification


class NotificationService:
    def __init__(self, notification_repo: NotificationRepository, session: AsyncSession):
        self.notification_repo = notification_repo
        self.session = session

    async def list_notifications(
        self,
        user_id: UUID,
        unread_only: bool,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[Notification], str | None, bool]:
        return await self.notification_repo.list_for_recipient(user_id, unread_only, cursor, limit)

    async def mark_read(self, user_id: UUID, notification_id: UUID) -> None:
        """Mark a notification read.

        Raises:
            NotFoundError: If it does not exist or belongs to someone else.
        """
        try:
            if not await self.notification_repo.mark_read(notification_id, user_id):
                raise NotFoundError("Notification not found")
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to mark notification read", error=str(e))
            raise
