"""Project creation and owner edits."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.projecthub.core.exceptions import (
    AppError,
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
)
from src.projecthub.core.logging import get_logger
from src.projecthub.core.security import derive_slug, slugify_title
from src.projecthub.models import Project
from src.projecthub.models.base import utc_now
from src.projecthub.repositories import CollaborationRepository, ProjectRepository, UserRepository
from src.projecthub.schemas.project import ContributorInput, ProjectCreate, ProjectUpdate
from src.projecthub.services.ledger import create_collaboration, find_project_by_slug, find_user_by_username

logger = get_logger(__name__)


class ProjectService:
    """Service for project writes. Reads go through FeedService."""

    def __init__(
        self,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        collaboration_repo: CollaborationRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.collaboration_repo = collaboration_repo
        self.session = session

    async def _unique_slug(self, owner_id: UUID, title: str, exclude_id: UUID | None = None) -> str:
        taken = await self.project_repo.list_slugs_with_prefix(
            owner_id, slugify_title(title), exclude_id=exclude_id
        )
        return derive_slug(title, taken)

    async def create_project(self, owner_id: UUID, payload: ProjectCreate) -> Project:
        """Create a project and record any contributors named up front.

        Raises:
            NotFoundError: Owner or a listed contributor does not exist.
            InvalidStateError: The owner is listed as a contributor.
            ConflictError: A concurrent create took the same slug.
        """
        try:
            owner = await self.user_repo.get_by_id(owner_id)
            if owner is None:
                raise NotFoundError("User not found")

            contributors = self._dedupe_contributors(payload.contributors)
            if any(c.user_id == owner_id for c in contributors):
                raise InvalidStateError("Project owner cannot be listed as a contributor")
            users = await self.user_repo.get_by_ids([c.user_id for c in contributors])
            missing = [c.user_id for c in contributors if c.user_id not in users]
            if missing:
                raise NotFoundError(f"Contributor not found: {missing[0]}")

            project = Project(
                owner_id=owner_id,
                title=payload.title,
                slug=await self._unique_slug(owner_id, payload.title),
                description=payload.description,
                domain=payload.domain,
                tech_stack=payload.tech_stack,
                status=payload.status.value,
                looking_for_contributors=payload.looking_for_contributors,
                project_photo=payload.project_photo,
                github_url=payload.github_url,
                deployment_url=payload.deployment_url,
                demo_url=payload.demo_url,
            )
            self.project_repo.add(project)
            await self.session.flush()

            for contributor in contributors:
                await create_collaboration(
                    self.collaboration_repo,
                    project,
                    contributor.user_id,
                    role=contributor.role,
                    contribution_summary=contributor.contribution_summary,
                )

            await self.session.commit()
            await self.session.refresh(project)

        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A project with this title already exists") from e
        except AppError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create project", error=str(e))
            raise

        logger.info(
            "Project created",
            project_id=str(project.id),
            owner_id=str(owner_id),
            slug=project.slug,
            contributors=len(contributors),
        )
        return project

    async def update_project(
        self,
        actor_id: UUID,
        owner_username: str,
        slug: str,
        changes: ProjectUpdate,
    ) -> Project:
        """Apply the owner's edits. A new title re-derives the slug.

        Raises:
            NotFoundError: Owner or project does not exist.
            ForbiddenError: Actor is not the owner.
        """
        try:
            owner = await find_user_by_username(self.user_repo, owner_username)
            if owner.id != actor_id:
                raise ForbiddenError("Not authorized to update this project")
            project = await find_project_by_slug(self.project_repo, owner, slug)

            updates = changes.model_dump(exclude_unset=True)
            if "status" in updates and updates["status"] is not None:
                updates["status"] = updates["status"].value
            for field in (
                "title",
                "description",
                "domain",
                "tech_stack",
                "status",
                "looking_for_contributors",
            ):
                # Required columns cannot be cleared
                if field in updates and updates[field] is None:
                    del updates[field]

            if "title" in updates and updates["title"] != project.title:
                project.slug = await self._unique_slug(
                    owner.id, updates["title"], exclude_id=project.id
                )
            for field, value in updates.items():
                setattr(project, field, value)
            project.updated_at = utc_now()

            self.project_repo.add(project)
            await self.session.commit()
            await self.session.refresh(project)

        except IntegrityError as e:
            await self.session.rollback()
            raise ConflictError("A project with this title already exists") from e
        except AppError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to update project", error=str(e))
            raise

        logger.info("Project updated", project_id=str(project.id), fields=sorted(updates))
        return project

    @staticmethod
    def _dedupe_contributors(contributors: list[ContributorInput]) -> list[ContributorInput]:
        seen: dict[UUID, ContributorInput] = {}
        for contributor in contributors:
            seen.setdefault(contributor.user_id, contributor)
        return list(seen.values())
