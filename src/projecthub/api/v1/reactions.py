"""Like and bookmark endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.projecthub.api.dependencies import CurrentUser, FeedServiceDep, ReactionServiceDep
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.project import FeedPage
from src.projecthub.schemas.reaction import BookmarkResult, BookmarkToggle, LikeResult

router = APIRouter(tags=["reactions"])


@router.post(
    "/projects/{project_id:uuid}/like",
    response_model=ApiResponse[LikeResult],
    summary="Like a project",
    responses={404: {"description": "Project not found"}},
)
async def like_project(
    project_id: UUID,
    user: CurrentUser,
    service: ReactionServiceDep,
) -> ApiResponse[LikeResult]:
    return ok("Project liked", await service.like(user.id, project_id))


@router.delete(
    "/projects/{project_id:uuid}/like",
    response_model=ApiResponse[LikeResult],
    summary="Unlike a project",
    responses={404: {"description": "Project not found"}},
)
async def unlike_project(
    project_id: UUID,
    user: CurrentUser,
    service: ReactionServiceDep,
) -> ApiResponse[LikeResult]:
    return ok("Project unliked", await service.unlike(user.id, project_id))


@router.put(
    "/users/me/bookmarks/{project_id}",
    response_model=ApiResponse[BookmarkResult],
    summary="Add or remove a bookmark",
    responses={404: {"description": "Project not found"}},
)
async def toggle_bookmark(
    project_id: UUID,
    payload: BookmarkToggle,
    user: CurrentUser,
    service: ReactionServiceDep,
) -> ApiResponse[BookmarkResult]:
    result = await service.toggle_bookmark(user.id, project_id, payload.action)
    message = "Bookmark added" if result.bookmarked else "Bookmark removed"
    return ok(message, result)


@router.get(
    "/users/me/bookmarks",
    response_model=ApiResponse[FeedPage],
    summary="My bookmarked projects",
)
async def list_bookmarks(
    user: CurrentUser,
    service: FeedServiceDep,
    cursor: Annotated[str | None, Query(description="Cursor from a previous page")] = None,
    limit: Annotated[int, Query(ge=1, le=50)] = 10,
) -> ApiResponse[FeedPage]:
    page = await service.list_bookmarks(user.id, cursor, limit)
    return ok("Bookmarks fetched successfully", page)
