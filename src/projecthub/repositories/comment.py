"""Repository for Comment entity."""

from uuid import UUID

from sqlmodel import select

from src.projecthub.models import Comment, User
from src.projecthub.repositories.base import BaseRepository, apply_keyset, split_page


class CommentRepository(BaseRepository[Comment]):
    model = Comment

    async def list_for_project(
        self, project_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[tuple[Comment, User]], str | None, bool]:
        """Comments on a project with their authors, newest first."""
        query = (
            select(Comment, User)
            .join(User, User.id == Comment.user_id)  # type: ignore[arg-type]
            .where(Comment.project_id == project_id)
        )
        query = apply_keyset(query, cursor, limit, Comment.created_at, Comment.id)
        result = await self.session.execute(query)
        rows = [(row[0], row[1]) for row in result.all()]
        return split_page(rows, limit, lambda row: (row[0].created_at, row[0].id))
