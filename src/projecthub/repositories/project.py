"""Repository for Project entity."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from src.projecthub.models import Project
from src.projecthub.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def get_by_owner_and_slug(self, owner_id: UUID, slug: str) -> Project | None:
        """Get an owner's project by slug, case-insensitively."""
        result = await self.session.execute(
            select(Project).where(
                Project.owner_id == owner_id,
                func.lower(Project.slug) == slug.lower(),
            )
        )
        return result.scalar_one_or_none()

    async def list_slugs_with_prefix(
        self, owner_id: UUID, base_slug: str, exclude_id: UUID | None = None
    ) -> set[str]:
        """Slugs of the owner's projects that could collide with ``base_slug``.

        Args:
            owner_id: Owner whose slug namespace is checked
            base_slug: Freshly derived slug, before any numeric suffix
            exclude_id: Project being renamed, whose current slug is free to reuse
        """
        query = select(Project.slug).where(
            Project.owner_id == owner_id,
            func.lower(Project.slug).startswith(base_slug.lower(), autoescape=True),
        )
        if exclude_id is not None:
            query = query.where(Project.id != exclude_id)
        result = await self.session.execute(query)
        return {slug.lower() for slug in result.scalars().all()}

    async def exists(self, project_id: UUID) -> bool:
        result = await self.session.execute(select(Project.id).where(Project.id == project_id))
        return result.scalar_one_or_none() is not None
