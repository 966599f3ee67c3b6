"""Join request workflow.

A request moves from ``pending`` to exactly one of ``approved``, ``rejected``
or ``cancelled``. Every transition is a compare-and-swap on the pending
status, and approval writes the collaboration in the same transaction, so an
approved request is never visible without its collaboration row.
"""

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
from src.projecthub.models import (
    JoinRequest,
    JoinRequestStatus,
    NotificationType,
    Project,
    RespondAction,
    User,
)
from src.projecthub.repositories import (
    CollaborationRepository,
    JoinRequestRepository,
    NotificationRepository,
    ProjectRepository,
    UserRepository,
)
from src.projecthub.schemas.join_request import JoinRequestView, RespondOutcome
from src.projecthub.schemas.user import UserSummary
from src.projecthub.services.ledger import (
    create_collaboration,
    find_active_collaboration,
    resolve_project,
)
from src.projecthub.services.notification_service import queue_notification

logger = get_logger(__name__)

DUPLICATE_PENDING_MESSAGE = "You already have a pending request for this project"


class JoinRequestService:
    """Service for join request operations."""

    def __init__(
        self,
        join_request_repo: JoinRequestRepository,
        project_repo: ProjectRepository,
        user_repo: UserRepository,
        collaboration_repo: CollaborationRepository,
        notification_repo: NotificationRepository,
        session: AsyncSession,
    ):
        self.join_request_repo = join_request_repo
        self.project_repo = project_repo
        self.user_repo = user_repo
        self.collaboration_repo = collaboration_repo
        self.notification_repo = notification_repo
        self.session = session

    async def request_to_join(
        self,
        requester_id: UUID,
        owner_username: str,
        project_slug: str,
        message: str | None = None,
        role_requested: str | None = None,
    ) -> JoinRequest:
        """Open a pending request and notify the project owner.

        Raises:
            NotFoundError: Owner, project or requester does not exist.
            InvalidStateError: Project is not recruiting, or requester owns it.
            ConflictError: Requester is already a collaborator or has a
                pending request.
        """
        try:
            _, project = await resolve_project(
                self.user_repo, self.project_repo, owner_username, project_slug
            )
            if project.owner_id == requester_id:
                raise InvalidStateError("You cannot request to join your own project")
            if not project.looking_for_contributors:
                raise InvalidStateError("This project is not accepting contributors")

            if await find_active_collaboration(self.collaboration_repo, project.id, requester_id):
                raise ConflictError("You are already a collaborator on this project")
            if await self.join_request_repo.find_pending(project.id, requester_id):
                raise ConflictError(DUPLICATE_PENDING_MESSAGE)

            requester = await self.user_repo.get_by_id(requester_id)
            if requester is None:
                raise NotFoundError("User not found")

            join_request = JoinRequest(
                project_id=project.id,
                requester_id=requester_id,
                message=message,
                role_requested=role_requested,
            )
            self.join_request_repo.add(join_request)
            await self.session.flush()

            queue_notification(
                self.notification_repo,
                recipient_id=project.owner_id,
                sender_id=requester_id,
                type=NotificationType.REQUEST_RECEIVED,
                title="New join request",
                message=f"{requester.username} wants to join {project.title}",
                link="/join-requests/incoming",
            )
            await self.session.commit()
            await self.session.refresh(join_request)

        except IntegrityError as e:
            # A concurrent request won the partial unique index on pending rows
            await self.session.rollback()
            raise ConflictError(DUPLICATE_PENDING_MESSAGE) from e
        except AppError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to create join request", error=str(e))
            raise

        logger.info(
            "Join request created",
            request_id=str(join_request.id),
            project_id=str(project.id),
            requester_id=str(requester_id),
        )
        return join_request

    async def respond_to_request(
        self,
        owner_id: UUID,
        request_id: UUID,
        action: RespondAction,
    ) -> RespondOutcome:
        """Approve or reject a pending request as the project's owner.

        Raises:
            NotFoundError: Request (or its project) does not exist.
            ForbiddenError: Acting user does not own the project.
            InvalidStateError: Request is no longer pending.
        """
        try:
            join_request, project = await self._load_request(request_id)
            if project.owner_id != owner_id:
                raise ForbiddenError("Only the project owner can respond to this request")
            self._ensure_pending(join_request)

            approve = action == RespondAction.ACCEPT
            new_status = JoinRequestStatus.APPROVED if approve else JoinRequestStatus.REJECTED
            if not await self.join_request_repo.transition_from_pending(
                request_id, new_status, reviewed_by=owner_id
            ):
                raise InvalidStateError("Request is no longer pending")

            collaboration_id = None
            if approve:
                collaboration = await create_collaboration(
                    self.collaboration_repo,
                    project,
                    join_request.requester_id,
                    role=join_request.role_requested,
                    request=join_request,
                )
                collaboration_id = collaboration.id

            queue_notification(
                self.notification_repo,
                recipient_id=join_request.requester_id,
                sender_id=owner_id,
                type=(
                    NotificationType.REQUEST_APPROVED
                    if approve
                    else NotificationType.REQUEST_REJECTED
                ),
                title="Join request approved" if approve else "Join request rejected",
                message=f"Your request to join {project.title} was {new_status.value}",
                link=f"/projects/{project.id}",
            )
            await self.session.commit()

        except AppError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to respond to join request", request_id=str(request_id), error=str(e))
            raise

        logger.info(
            "Join request resolved",
            request_id=str(request_id),
            status=new_status.value,
            project_id=str(project.id),
            collaboration_id=str(collaboration_id) if collaboration_id else None,
        )
        return RespondOutcome(
            request_id=request_id,
            action=action,
            status=new_status,
            collaboration_id=collaboration_id,
        )

    async def cancel_request(self, requester_id: UUID, request_id: UUID) -> JoinRequest:
        """Withdraw a pending request as the user who made it."""
        try:
            join_request, project = await self._load_request(request_id)
            if join_request.requester_id != requester_id:
                raise ForbiddenError("Only the requester can cancel this request")
            self._ensure_pending(join_request)

            if not await self.join_request_repo.transition_from_pending(
                request_id, JoinRequestStatus.CANCELLED
            ):
                raise InvalidStateError("Request is no longer pending")

            queue_notification(
                self.notification_repo,
                recipient_id=project.owner_id,
                sender_id=requester_id,
                type=NotificationType.REQUEST_CANCELLED,
                title="Join request withdrawn",
                message=f"A request to join {project.title} was withdrawn",
                link="/join-requests/incoming",
            )
            await self.session.commit()
            await self.session.refresh(join_request)

        except AppError:
            await self.session.rollback()
            raise
        except Exception as e:
            await self.session.rollback()
            logger.error("Failed to cancel join request", request_id=str(request_id), error=str(e))
            raise

        logger.info("Join request cancelled", request_id=str(request_id))
        return join_request

    async def list_incoming(
        self, owner_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[JoinRequestView], str | None, bool]:
        rows, next_cursor, has_more = await self.join_request_repo.list_incoming(
            owner_id, cursor, limit
        )
        return [self._to_view(*row) for row in rows], next_cursor, has_more

    async def list_outgoing(
        self, requester_id: UUID, cursor: str | None, limit: int
    ) -> tuple[list[JoinRequestView], str | None, bool]:
        rows, next_cursor, has_more = await self.join_request_repo.list_outgoing(
            requester_id, cursor, limit
        )
        return [self._to_view(*row) for row in rows], next_cursor, has_more

    async def reconcile_approved_requests(self, batch_size: int) -> int:
        """Create collaborations missing for approved requests.

        Safe to run repeatedly; each pass repairs at most ``batch_size`` rows.

        Returns:
            Number of collaborations created.
        """
        try:
            orphans = await self.join_request_repo.list_approved_without_collaboration(batch_size)
            created = 0
            for join_request in orphans:
                project = await self.project_repo.get_by_id(join_request.project_id)
                if project is None:
                    logger.warning(
                        "Approved request references missing project",
                        request_id=str(join_request.id),
                    )
                    continue
                await create_collaboration(
                    self.collaboration_repo,
                    project,
                    join_request.requester_id,
                    role=join_request.role_requested,
                    request=join_request,
                )
                created += 1
            await self.session.commit()

        except Exception as e:
            await self.session.rollback()
            logger.error("Collaboration reconciliation failed", error=str(e))
            raise

        if created:
            logger.info("Reconciled approved join requests", created=created)
        return created

    async def _load_request(self, request_id: UUID) -> tuple[JoinRequest, Project]:
        join_request = await self.join_request_repo.get_by_id(request_id)
        if join_request is None:
            raise NotFoundError("Join request not found")
        project = await self.project_repo.get_by_id(join_request.project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return join_request, project

    @staticmethod
    def _ensure_pending(join_request: JoinRequest) -> None:
        if not join_request.is_pending:
            raise InvalidStateError(f"Request has already been {join_request.status}")

    @staticmethod
    def _to_view(join_request: JoinRequest, project: Project, requester: User) -> JoinRequestView:
        return JoinRequestView(
            id=join_request.id,
            project_id=join_request.project_id,
            requester_id=join_request.requester_id,
            message=join_request.message,
            role_requested=join_request.role_requested,
            status=join_request.status_enum,
            reviewed_by=join_request.reviewed_by,
            reviewed_at=join_request.reviewed_at,
            created_at=join_request.created_at,
            project_title=project.title,
            project_slug=project.slug,
            requester=UserSummary.model_validate(requester),
        )
