"""Comment endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, Request, status

from src.projecthub.api.dependencies import CommentServiceDep, CurrentUser
from src.projecthub.core.config import get_settings
from src.projecthub.core.rate_limit import limiter
from src.projecthub.schemas.comment import CommentCreate, CommentRead
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/projects/{project_id:uuid}/comments", tags=["comments"])


@router.get(
    "",
    response_model=ApiResponse[PaginatedResponse[CommentRead]],
    summary="List comments",
    responses={404: {"description": "Project not found"}},
)
async def list_comments(
    project_id: UUID,
    service: CommentServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = 20,
) -> ApiResponse[PaginatedResponse[CommentRead]]:
    items, next_cursor, has_more = await service.list_comments(project_id, cursor, limit)
    return ok(
        "Comments fetched successfully",
        PaginatedResponse(items=items, next_cursor=next_cursor, has_more=has_more),
    )


@router.post(
    "",
    response_model=ApiResponse[CommentRead],
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment",
    responses={404: {"description": "Project not found"}},
)
@limiter.limit(lambda: get_settings().comment_rate_limit)
async def add_comment(
    request: Request,
    project_id: UUID,
    payload: CommentCreate,
    user: CurrentUser,
    service: CommentServiceDep,
) -> ApiResponse[CommentRead]:
    comment = await service.add_comment(user.id, project_id, payload.content)
    return ok("Comment added successfully", comment)
