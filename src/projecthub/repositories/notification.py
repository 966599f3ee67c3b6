"""Repository for Notification entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.projecthub.models import Notification
from src.projecthub.repositories.base import BaseRepository


class NotificationRepository(BaseRepository[Notification]):
    model = Notification

    async def list_for_recipient(
        self,
        recipient_id: UUID,
        unread_only: bool,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[Notification], str | None, bool]:
        query = select(Notification).where(Notification.recipient_id == recipient_id)
        if unread_only:
            query = query.where(Notification.read == False)  # noqa: E712
        return await self.paginate(query, cursor, limit)

    async def mark_read(self, notification_id: UUID, recipient_id: UUID) -> bool:
        """Mark one of the recipient's notifications read.

        Returns:
            False if no such notification belongs to the recipient.
        """
        result = await self.session.execute(
            update(Notification)
            .where(
                Notification.id == notification_id,  # type: ignore[arg-type]
                Notification.recipient_id == recipient_id,  # type: ignore[arg-type]
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1  # type: ignore[attr-defined]
