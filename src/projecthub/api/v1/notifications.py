"""Notification endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.projecthub.api.dependencies import CurrentUser, NotificationServiceDep
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.notification import NotificationRead
from src.projecthub.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=ApiResponse[PaginatedResponse[NotificationRead]])
async def list_notifications(
    user: CurrentUser,
    service: NotificationServiceDep,
    unread_only: Annotated[bool, Query(description="Only unread notifications")] = False,
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = 20,
) -> ApiResponse[PaginatedResponse[NotificationRead]]:
    items, next_cursor, has_more = await service.list_notifications(
        user.id, unread_only, cursor, limit
    )
    return ok(
        "Notifications fetched successfully",
        PaginatedResponse(
            items=[NotificationRead.model_validate(n) for n in items],
            next_cursor=next_cursor,
            has_more=has_more,
        ),
    )


@router.post(
    "/{notification_id}/read",
    response_model=ApiResponse[None],
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(
    notification_id: UUID,
    user: CurrentUser,
    service: NotificationServiceDep,
) -> ApiResponse[None]:
    await service.mark_read(user.id, notification_id)
    return ok("Notification marked as read")
