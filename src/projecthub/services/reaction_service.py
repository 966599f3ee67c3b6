"""Likes and bookmarks."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.core.logging import get_logger
from src.projecthub.models import BookmarkAction
from src.projecthub.repositories import ProjectRepository, ReactionRepository
from src.projecthub.schemas.reaction import BookmarkResult, LikeResult

logger = get_logger(__name__)


class ReactionService:
    """Set-membership writes. Repeating an operation is a no-op."""

    def __init__(
        self,
        reaction_repo: ReactionRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.reaction_repo = reaction_repo
        self.project_repo = project_repo
        self.session = session

    async def like(self, viewer_id: UUID, project_id: UUID) -> LikeResult:
        try:
            await self._ensure_project(project_id)
            await self.reaction_repo.add_like(project_id, viewer_id)
            count = await self.reaction_repo.count_likes(project_id)
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to like project", project_id=str(project_id), error=str(e))
            raise

        return LikeResult(project_id=project_id, liked=True, like_count=count)

    async def unlike(self, viewer_id: UUID, project_id: UUID) -> LikeResult:
        try:
            await self._ensure_project(project_id)
            await self.reaction_repo.remove_like(project_id, viewer_id)
            count = await self.reaction_repo.count_likes(project_id)
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to unlike project", project_id=str(project_id), error=str(e))
            raise

        return LikeResult(project_id=project_id, liked=False, like_count=count)

    async def toggle_bookmark(
        self, viewer_id: UUID, project_id: UUID, action: BookmarkAction
    ) -> BookmarkResult:
        """Add or remove a bookmark. The action is explicit, never inferred."""
        try:
            await self._ensure_project(project_id)
            if action == BookmarkAction.ADD:
                await self.reaction_repo.add_bookmark(viewer_id, project_id)
            else:
                await self.reaction_repo.remove_bookmark(viewer_id, project_id)
            await self.session.commit()
        except NotFoundError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update bookmark", project_id=str(project_id), error=str(e))
            raise

        return BookmarkResult(
            project_id=project_id,
            action=action,
            bookmarked=action == BookmarkAction.ADD,
        )

    async def _ensure_project(self, project_id: UUID) -> None:
        if not await self.project_repo.exists(project_id):
            raise NotFoundError("Project not found")
