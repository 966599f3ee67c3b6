"""Collaboration reconciliation activity."""

from temporalio import activity

from src.projecthub.core.db import get_session
from src.projecthub.repositories import (
    CollaborationRepository,
    JoinRequestRepository,
    NotificationRepository,
    ProjectRepository,
    UserRepository,
)
from src.projecthub.services.join_request_service import JoinRequestService


@activity.defn
async def reconcile_approved_requests(batch_size: int) -> int:
    """
    Create collaborations missing for approved join requests.

    Approval normally writes the collaboration in the same transaction; this
    repairs rows left behind by manual edits or older code paths.

    Idempotent: only requests without a collaboration are selected, so a
    second run finds nothing to do.

    Args:
        batch_size: Maximum number of requests repaired per run

    Returns:
        Number of collaborations created
    """
    activity.logger.info(f"Reconciling approved join requests (batch size: {batch_size})")

    async with get_session() as session:
        service = JoinRequestService(
            JoinRequestRepository(session),
            ProjectRepository(session),
            UserRepository(session),
            CollaborationRepository(session),
            NotificationRepository(session),
            session,
        )
        created = await service.reconcile_approved_requests(batch_size)

    activity.logger.info(f"Created {created} missing collaborations")
    return created
