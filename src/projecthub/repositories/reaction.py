"""Repository for like and bookmark sets.

Both are junction tables keyed by (project, user), so add and remove are
idempotent set-membership writes.
"""

from uuid import UUID

from sqlalchemy import delete, func
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from src.projecthub.models import Bookmark, ProjectLike


class ReactionRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add_like(self, project_id: UUID, user_id: UUID) -> None:
        await self.session.execute(
            insert(ProjectLike)
            .values(project_id=project_id, user_id=user_id)
            .on_conflict_do_nothing(index_elements=["project_id", "user_id"])
        )

    async def remove_like(self, project_id: UUID, user_id: UUID) -> None:
        await self.session.execute(
            delete(ProjectLike).where(
                ProjectLike.project_id == project_id,  # type: ignore[arg-type]
                ProjectLike.user_id == user_id,  # type: ignore[arg-type]
            )
        )

    async def count_likes(self, project_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(ProjectLike).where(ProjectLike.project_id == project_id)
        )
        return int(result.scalar_one())

    async def add_bookmark(self, user_id: UUID, project_id: UUID) -> None:
        await self.session.execute(
            insert(Bookmark)
            .values(user_id=user_id, project_id=project_id)
            .on_conflict_do_nothing(index_elements=["user_id", "project_id"])
        )

    async def remove_bookmark(self, user_id: UUID, project_id: UUID) -> None:
        await self.session.execute(
            delete(Bookmark).where(
                Bookmark.user_id == user_id,  # type: ignore[arg-type]
                Bookmark.project_id == project_id,  # type: ignore[arg-type]
            )
        )
