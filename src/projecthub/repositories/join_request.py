"""Repository for JoinRequest entity."""

from uuid import UUID

from sqlalchemy import exists, update
from sqlmodel import select

from src.projecthub.models import Collaboration, JoinRequest, JoinRequestStatus, Project, User
from src.projecthub.models.base import utc_now
from src.projecthub.repositories.base import BaseRepository, apply_keyset, split_page


class JoinRequestRepository(BaseRepository[JoinRequest]):
    model = JoinRequest

    async def find_pending(self, project_id: UUID, requester_id: UUID) -> JoinRequest | None:
        """Get the pending request for (project, requester), if any."""
        result = await self.session.execute(
            select(JoinRequest).where(
                JoinRequest.project_id == project_id,
                JoinRequest.requester_id == requester_id,
                JoinRequest.status == JoinRequestStatus.PENDING.value,
            )
        )
        return result.scalar_one_or_none()

    async def transition_from_pending(
        self,
        request_id: UUID,
        new_status: JoinRequestStatus,
        reviewed_by: UUID | None = None,
    ) -> bool:
        """Compare-and-swap a pending request into ``new_status``.

        Returns:
            True if this call performed the transition, False if the request
            was no longer pending.
        """
        now = utc_now()
        values: dict[str, object] = {"status": new_status.value, "updated_at": now}
        if reviewed_by is not None:
            values["reviewed_by"] = reviewed_by
            values["reviewed_at"] = now

        result = await self.session.execute(
            update(JoinRequest)
            .where(
                JoinRequest.id == request_id,  # type: ignore[arg-type]
                JoinRequest.status == JoinRequestStatus.PENDING.value,  # type: ignore[arg-type]
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def list_incoming(
        self, owner_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[tuple[JoinRequest, Project, User]], str | None, bool]:
        """Pending requests against projects owned by ``owner_id``, newest first."""
        query = (
            select(JoinRequest, Project, User)
            .join(Project, Project.id == JoinRequest.project_id)  # type: ignore[arg-type]
            .join(User, User.id == JoinRequest.requester_id)  # type: ignore[arg-type]
            .where(
                Project.owner_id == owner_id,
                JoinRequest.status == JoinRequestStatus.PENDING.value,
            )
        )
        return await self._page(query, cursor, limit)

    async def list_outgoing(
        self, requester_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[tuple[JoinRequest, Project, User]], str | None, bool]:
        """Every request made by ``requester_id``, in any state, newest first."""
        query = (
            select(JoinRequest, Project, User)
            .join(Project, Project.id == JoinRequest.project_id)  # type: ignore[arg-type]
            .join(User, User.id == JoinRequest.requester_id)  # type: ignore[arg-type]
            .where(JoinRequest.requester_id == requester_id)
        )
        return await self._page(query, cursor, limit)

    async def list_approved_without_collaboration(self, limit: int) -> list[JoinRequest]:
        """Approved requests whose requester has no collaboration on the project."""
        missing = ~exists().where(
            Collaboration.project_id == JoinRequest.project_id,
            Collaboration.collaborator_id == JoinRequest.requester_id,
        )
        result = await self.session.execute(
            select(JoinRequest)
            .where(JoinRequest.status == JoinRequestStatus.APPROVED.value, missing)
            .order_by(JoinRequest.created_at, JoinRequest.id)  # type: ignore[arg-type]
            .limit(limit)
        )
        return list(result.scalars().all())

    async def _page(
        self, query: object, cursor: str | None, limit: int
    ) -> tuple[list[tuple[JoinRequest, Project, User]], str | None, bool]:
        query = apply_keyset(query, cursor, limit, JoinRequest.created_at, JoinRequest.id)
        result = await self.session.execute(query)  # type: ignore[call-overload]
        rows = [(row[0], row[1], row[2]) for row in result.all()]
        return split_page(rows, limit, lambda row: (row[0].created_at, row[0].id))
