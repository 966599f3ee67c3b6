"""Lookups and writes shared by the project, feed and join-request services.

These helpers raise domain errors but never commit; the calling service owns
the transaction.
"""

from uuid import UUID

from sqlalchemy.exc import IntegrityError

from src.projecthub.core.exceptions import ConflictError, NotFoundError
from src.projecthub.models import DEFAULT_COLLABORATOR_ROLE, Collaboration, JoinRequest, Project, User
from src.projecthub.repositories import CollaborationRepository, ProjectRepository, UserRepository


async def find_user_by_username(user_repo: UserRepository, username: str) -> User:
    user = await user_repo.get_by_username(username)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def find_project_by_slug(project_repo: ProjectRepository, owner: User, slug: str) -> Project:
    """Resolve an owner's project by slug, ignoring case."""
    project = await project_repo.get_by_owner_and_slug(owner.id, slug)
    if project is None:
        raise NotFoundError("Project not found")
    return project


async def resolve_project(
    user_repo: UserRepository,
    project_repo: ProjectRepository,
    owner_username: str,
    slug: str,
) -> tuple[User, Project]:
    owner = await find_user_by_username(user_repo, owner_username)
    return owner, await find_project_by_slug(project_repo, owner, slug)


async def find_active_collaboration(
    collaboration_repo: CollaborationRepository, project_id: UUID, collaborator_id: UUID
) -> Collaboration | None:
    return await collaboration_repo.find_active(project_id, collaborator_id)


async def create_collaboration(
    collaboration_repo: CollaborationRepository,
    project: Project,
    collaborator_id: UUID,
    role: str | None = None,
    contribution_summary: str = "",
    request: JoinRequest | None = None,
) -> Collaboration:
    """Append a collaboration row for (project, collaborator).

    ``owner_id`` is copied from the project as it is now and never updated.

    Raises:
        ConflictError: If the pair already has a collaboration, whether found
            up front or rejected by the unique constraint at flush.
    """
    if await collaboration_repo.find_active(project.id, collaborator_id) is not None:
        raise ConflictError("User is already a collaborator on this project")

    collaboration = Collaboration(
        project_id=project.id,
        owner_id=project.owner_id,
        collaborator_id=collaborator_id,
        role=role or DEFAULT_COLLABORATOR_ROLE,
        contribution_summary=contribution_summary,
        request_id=request.id if request is not None else None,
    )
    collaboration_repo.add(collaboration)
    try:
        await collaboration_repo.session.flush()
    except IntegrityError as e:
        raise ConflictError("User is already a collaborator on this project") from e
    return collaboration
