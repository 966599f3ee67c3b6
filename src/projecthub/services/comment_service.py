"""Comment service."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import Comment, User
from src.projecthub.repositories import CommentRepository, ProjectRepository, UserRepository
from src.projecthub.schemas.comment import CommentRead
from src.projecthub.schemas.user import UserSummary

logger = get_logger(__name__)


def _to_read(comment: Comment, author: User) -> CommentRead:
    return CommentRead(
        id=comment.id,
        project_id=comment.project_id,
        content=comment.content,
        created_at=comment.created_at,
        author=UserSummary.model_validate(author),
    )


class CommentService:
    def __init__(
        self,
        comment_repo: CommentRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        session: AsyncSession,
    ):
        self.comment_repo = comment_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.session = session

    async def add_comment(self, user_id: UUID, project_id: UUID, content: str) -> CommentRead:
        try:
            if not await self.project_repo.exists(project_id):
                raise NotFoundError("Project not found")
            author = await self.user_repo.get_by_id(user_id)
            if author is None:
                raise NotFoundError("User not found")

            comment = Comment(project_id=project_id, user_id=user_id, content=content)
            self.comment_repo.add(comment)
            await self.session.commit()
            await self.session.refresh(comment)
        except NotFoundError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to add comment", project_id=str(project_id), error=str(e))
            raise

        logger.info("Comment added", comment_id=str(comment.id), project_id=str(project_id))
        return _to_read(comment, author)

    async def list_comments(
        self, project_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[CommentRead], str | None, bool]:
        """Newest comments first."""
        if not await self.project_repo.exists(project_id):
            raise NotFoundError("Project not found")
        rows, next_cursor, has_more = await self.comment_repo.list_for_project(
            project_id, cursor, limit
        )
        return [_to_read(comment, author) for comment, author in rows], next_cursor, has_more
