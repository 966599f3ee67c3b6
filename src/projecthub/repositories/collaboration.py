"""Repository for the collaboration ledger."""

from collections import defaultdict
from uuid import UUID

from sqlmodel import select

from src.projecthub.models import Collaboration, User
from src.projecthub.repositories.base import BaseRepository
from src.projecthub.schemas.project import ContributorView


class CollaborationRepository(BaseRepository[Collaboration]):
    """Append-only ledger of accepted project contributors."""

    model = Collaboration

    async def find_active(self, project_id: UUID, collaborator_id: UUID) -> Collaboration | None:
        """Get the collaboration between a project and a user, if any."""
        result = await self.session.execute(
            select(Collaboration).where(
                Collaboration.project_id == project_id,
                Collaboration.collaborator_id == collaborator_id,
            )
        )
        return result.scalar_one_or_none()

    async def list_collaborators(self, project_ids: list[UUID]) -> dict[UUID, list[ContributorView]]:
        """Contributors for a set of projects in one query, in insertion order.

        Projects without contributors are absent from the result.
        """
        if not project_ids:
            return {}

        result = await self.session.execute(
            select(Collaboration, User)
            .join(User, User.id == Collaboration.collaborator_id)  # type: ignore[arg-type]
            .where(Collaboration.project_id.in_(project_ids))  # type: ignore[attr-defined]
            .order_by(Collaboration.created_at, Collaboration.id)  # type: ignore[arg-type]
        )

        by_project: dict[UUID, list[ContributorView]] = defaultdict(list)
        for collaboration, user in result.all():
            by_project[collaboration.project_id].append(
                ContributorView(
                    user_id=user.id,
                    username=user.username,
                    name=user.name,
                    profile_photo=user.profile_photo,
                    role=collaboration.role,
                    contribution_summary=collaboration.contribution_summary,
                )
            )
        return dict(by_project)

