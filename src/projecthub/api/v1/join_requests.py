"""Join request endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Path, Query, Request, status

from src.projecthub.api.dependencies import CurrentUser, JoinRequestServiceDep
from src.projecthub.core.config import get_settings
from src.projecthub.core.rate_limit import limiter
from src.projecthub.core.security import USERNAME_REGEX
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.join_request import (
    JoinRequestCreate,
    JoinRequestRead,
    JoinRequestView,
    RespondOutcome,
    RespondRequest,
)
from src.projecthub.schemas.pagination import PaginatedResponse

router = APIRouter(tags=["join-requests"])

Cursor = Annotated[str | None, Query(description="Cursor from a previous page")]
PageSize = Annotated[int, Query(ge=1, le=50, description="Max items to return")]


@router.post(
    "/projects/{username}/{slug}/join-requests",
    response_model=ApiResponse[JoinRequestRead],
    status_code=status.HTTP_201_CREATED,
    summary="Request to join a project",
    responses={
        400: {"description": "Project is not accepting contributors"},
        404: {"description": "Owner or project not found"},
        409: {"description": "Already a collaborator or already requested"},
    },
)
@limiter.limit(lambda: get_settings().join_request_rate_limit)
async def request_to_join(
    request: Request,
    username: Annotated[str, Path(pattern=USERNAME_REGEX)],
    slug: Annotated[str, Path(min_length=1, max_length=120)],
    payload: JoinRequestCreate,
    user: CurrentUser,
    service: JoinRequestServiceDep,
) -> ApiResponse[JoinRequestRead]:
    join_request = await service.request_to_join(
        user.id,
        username,
        slug,
        message=payload.message,
        role_requested=payload.role_requested,
    )
    return ok("Request sent successfully", JoinRequestRead.model_validate(join_request))


@router.get(
    "/join-requests/incoming",
    response_model=ApiResponse[PaginatedResponse[JoinRequestView]],
    summary="Pending requests for my projects",
)
async def list_incoming(
    user: CurrentUser,
    service: JoinRequestServiceDep,
    cursor: Cursor = None,
    limit: PageSize = 20,
) -> ApiResponse[PaginatedResponse[JoinRequestView]]:
    items, next_cursor, has_more = await service.list_incoming(user.id, cursor, limit)
    return ok(
        "Requests fetched successfully",
        PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more),
    )


@router.get(
    "/join-requests/outgoing",
    response_model=ApiResponse[PaginatedResponse[JoinRequestView]],
    summary="Requests I have made",
)
async def list_outgoing(
    user: CurrentUser,
    service: JoinRequestServiceDep,
    cursor: Cursor = None,
    limit: PageSize = 20,
) -> ApiResponse[PaginatedResponse[JoinRequestView]]:
    items, next_cursor, has_more = await service.list_outgoing(user.id, cursor, limit)
    return ok(
        "Requests fetched successfully",
        PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more),
    )


@router.post(
    "/join-requests/{request_id}/respond",
    response_model=ApiResponse[RespondOutcome],
    summary="Accept or reject a request",
    responses={
        400: {"description": "Request is no longer pending"},
        403: {"description": "Not the project owner"},
        404: {"description": "Request not found"},
    },
)
async def respond_to_request(
    request_id: UUID,
    payload: RespondRequest,
    user: CurrentUser,
    service: JoinRequestServiceDep,
) -> ApiResponse[RespondOutcome]:
    outcome = await service.respond_to_request(user.id, request_id, payload.action)
    return ok(f"Request {outcome.status.value}", outcome)


@router.post(
    "/join-requests/{request_id}/cancel",
    response_model=ApiResponse[JoinRequestRead],
    summary="Withdraw my request",
    responses={
        400: {"description": "Request is no longer pending"},
        403: {"description": "Not the requester"},
        404: {"description": "Request not found"},
    },
)
async def cancel_request(
    request_id: UUID,
    user: CurrentUser,
    service: JoinRequestServiceDep,
) -> ApiResponse[JoinRequestRead]:
    join_request = await service.cancel_request(user.id, request_id)
    return ok("Request cancelled", JoinRequestRead.model_validate(join_request))
