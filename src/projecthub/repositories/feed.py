"""Read side of the feed: projects joined with owner and reaction aggregates.

Every listing is a single SELECT. Owner fields come from a join, counts and
per-viewer flags from correlated scalar subqueries, so a page never costs
more than this query plus one batched contributor lookup.
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import exists, false, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.models import Bookmark, Collaboration, Comment, Project, ProjectLike, User
from src.projecthub.repositories.base import apply_keyset, split_page


@dataclass(frozen=True)
class ProjectRecord:
    """A project row plus everything the feed shows next to it."""

    project: Project
    owner: User
    comment_count: int
    like_count: int
    liked_by_user: bool
    bookmarked_by_user: bool


def escape_like(text: str) -> str:
    r"""Escape LIKE wildcards so user input matches literally.

    >>> escape_like("100%_sure\\")
    '100\\%\\_sure\\\\'
    """
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class FeedRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    def _enriched_select(self, viewer_id: UUID | None) -> Any:
        comment_count = (
            select(func.count(Comment.id))
            .where(Comment.project_id == Project.id)
            .correlate(Project)
            .scalar_subquery()
        )
        like_count = (
            select(func.count())
            .select_from(ProjectLike)
            .where(ProjectLike.project_id == Project.id)
            .correlate(Project)
            .scalar_subquery()
        )
        if viewer_id is None:
            liked: Any = false()
            bookmarked: Any = false()
        else:
            liked = exists().where(
                ProjectLike.project_id == Project.id,
                ProjectLike.user_id == viewer_id,
            )
            bookmarked = exists().where(
                Bookmark.project_id == Project.id,
                Bookmark.user_id == viewer_id,
            )

        return select(
            Project,
            User,
            comment_count.label("comment_count"),
            like_count.label("like_count"),
            liked.label("liked_by_user"),
            bookmarked.label("bookmarked_by_user"),
        ).join(User, User.id == Project.owner_id)

    async def _page(
        self,
        viewer_id: UUID | None,
        cursor: str | None,
        limit: int,
        *conditions: Any,
    ) -> tuple[list[ProjectRecord], str | None, bool]:
        query = self._enriched_select(viewer_id)
        if conditions:
            query = query.where(*conditions)
        query = apply_keyset(query, cursor, limit, Project.created_at, Project.id)

        result = await self.session.execute(query)
        records = [self._to_record(row) for row in result.all()]
        return split_page(records, limit, lambda r: (r.project.created_at, r.project.id))

    @staticmethod
    def _to_record(row: Any) -> ProjectRecord:
        project, owner, comment_count, like_count, liked, bookmarked = row
        return ProjectRecord(
            project=project,
            owner=owner,
            comment_count=int(comment_count or 0),
            like_count=int(like_count or 0),
            liked_by_user=bool(liked),
            bookmarked_by_user=bool(bookmarked),
        )

    async def list_feed(
        self,
        viewer_id: UUID | None,
        cursor: str | None,
        limit: int,
        tech_stack: list[str] | None = None,
        domains: list[str] | None = None,
        search: str | None = None,
    ) -> tuple[list[ProjectRecord], str | None, bool]:
        """Public feed, newest first. Filters combine with AND; empty means absent."""
        conditions: list[Any] = []
        if tech_stack:
            conditions.append(Project.tech_stack.overlap(tech_stack))  # type: ignore[attr-defined]
        if domains:
            conditions.append(Project.domain.in_(domains))  # type: ignore[attr-defined]
        if search:
            pattern = f"%{escape_like(search)}%"
            conditions.append(
                or_(
                    Project.title.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                    Project.description.ilike(pattern, escape="\\"),  # type: ignore[attr-defined]
                )
            )
        return await self._page(viewer_id, cursor, limit, *conditions)

    async def list_owned(
        self, viewer_id: UUID | None, owner_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[ProjectRecord], str | None, bool]:
        return await self._page(viewer_id, cursor, limit, Project.owner_id == owner_id)

    async def list_contributed(
        self, viewer_id: UUID | None, collaborator_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[ProjectRecord], str | None, bool]:
        contributed = exists().where(
            Collaboration.project_id == Project.id,
            Collaboration.collaborator_id == collaborator_id,
        )
        return await self._page(viewer_id, cursor, limit, contributed)

    async def list_bookmarked(
        self, user_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[ProjectRecord], str | None, bool]:
        saved = exists().where(Bookmark.project_id == Project.id, Bookmark.user_id == user_id)
        return await self._page(user_id, cursor, limit, saved)

    async def get_one(self, viewer_id: UUID | None, project_id: UUID) -> ProjectRecord | None:
        result = await self.session.execute(
            self._enriched_select(viewer_id).where(Project.id == project_id)
        )
        row = result.first()
        return self._to_record(row) if row is not None else None
