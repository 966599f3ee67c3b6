"""Feed aggregation: enriched, per-viewer project listings."""

from uuid import UUID

from src.projecthub.core.config import get_settings
from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.repositories import (
    CollaborationRepository,
    FeedRepository,
    ProjectRecord,
    ProjectRepository,
    UserRepository,
)
from src.projecthub.schemas.project import ContributorView, FeedPage, ProjectFeedItem
from src.projecthub.schemas.user import UserSummary
from src.projecthub.services.ledger import resolve_project


def split_filter_values(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated query values, dropping blanks.

    >>> split_filter_values(["React, Node", "", "Vue"])
    ['React', 'Node', 'Vue']
    """
    if not values:
        return []
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def clamp_page_size(page_size: int | None) -> int:
    settings = get_settings()
    if page_size is None:
        return settings.feed_default_page_size
    return max(1, min(page_size, settings.feed_max_page_size))


class FeedService:
    """Builds feed pages from one enriched query plus one contributor batch."""

    def __init__(
        self,
        feed_repo: FeedRepository,
        collaboration_repo: CollaborationRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
    ):
        self.feed_repo = feed_repo
        self.collaboration_repo = collaboration_repo
        self.project_repo = project_repo
        self.user_repo = user_repo

    async def get_project_feed(
        self,
        viewer_id: UUID | None,
        cursor: str | None = None,
        page_size: int | None = None,
        tech_stack: list[str] | None = None,
        domain: list[str] | None = None,
        search: str | None = None,
    ) -> FeedPage:
        """Newest-first page of projects matching every supplied filter.

        Args:
            viewer_id: Authenticated viewer, or None for anonymous access
            cursor: Token from a previous page's ``next_cursor``
            page_size: Items per page, clamped to the configured bounds
            tech_stack: Match projects using any of these technologies
            domain: Match projects in any of these domains
            search: Case-insensitive substring of title or description

        Raises:
            InvalidStateError: If the cursor is malformed.
        """
        limit = clamp_page_size(page_size)
        search = search.strip() if search else None
        records, next_cursor, _ = await self.feed_repo.list_feed(
            viewer_id,
            cursor,
            limit,
            tech_stack=split_filter_values(tech_stack),
            domains=split_filter_values(domain),
            search=search or None,
        )
        return FeedPage(projects=await self._enrich(records), next_cursor=next_cursor)

    async def get_project(
        self, viewer_id: UUID | None, owner_username: str, slug: str
    ) -> ProjectFeedItem:
        _, project = await resolve_project(self.user_repo, self.project_repo, owner_username, slug)
        record = await self.feed_repo.get_one(viewer_id, project.id)
        if record is None:
            raise NotFoundError("Project not found")
        return (await self._enrich([record]))[0]

    async def list_owned_projects(
        self, user_id: UUID, cursor: str | None, page_size: int | None
    ) -> FeedPage:
        records, next_cursor, _ = await self.feed_repo.list_owned(
            user_id, user_id, cursor, clamp_page_size(page_size)
        )
        return FeedPage(projects=await self._enrich(records), next_cursor=next_cursor)

    async def list_contributed_projects(
        self, user_id: UUID, cursor: str | None, page_size: int | None
    ) -> FeedPage:
        records, next_cursor, _ = await self.feed_repo.list_contributed(
            user_id, user_id, cursor, clamp_page_size(page_size)
        )
        return FeedPage(projects=await self._enrich(records), next_cursor=next_cursor)

    async def list_bookmarks(
        self, user_id: UUID, cursor: str | None, page_size: int | None
    ) -> FeedPage:
        records, next_cursor, _ = await self.feed_repo.list_bookmarked(
            user_id, cursor, clamp_page_size(page_size)
        )
        return FeedPage(projects=await self._enrich(records), next_cursor=next_cursor)

    async def _enrich(self, records: list[ProjectRecord]) -> list[ProjectFeedItem]:
        if not records:
            return []
        contributors = await self.collaboration_repo.list_collaborators(
            [record.project.id for record in records]
        )
        return [to_feed_item(record, contributors.get(record.project.id, [])) for record in records]


def to_feed_item(record: ProjectRecord, contributors: list[ContributorView]) -> ProjectFeedItem:
    project = record.project
    return ProjectFeedItem(
        id=project.id,
        title=project.title,
        slug=project.slug,
        description=project.description,
        domain=project.domain,
        tech_stack=list(project.tech_stack or []),
        status=project.status_enum,
        looking_for_contributors=project.looking_for_contributors,
        project_photo=project.project_photo,
        github_url=project.github_url,
        deployment_url=project.deployment_url,
        demo_url=project.demo_url,
        created_at=project.created_at,
        updated_at=project.updated_at,
        owner=UserSummary.model_validate(record.owner),
        contributors=contributors,
        comment_count=record.comment_count,
        like_count=record.like_count,
        liked_by_user=record.liked_by_user,
        bookmarked_by_user=record.bookmarked_by_user,
    )
