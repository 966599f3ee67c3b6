"""Project endpoints: feed, project pages and owner edits."""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from src.projecthub.api.dependencies import (
    CurrentUser,
    FeedServiceDep,
    OptionalUser,
    ProjectServiceDep,
)
from src.projecthub.core.security import USERNAME_REGEX
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.project import (
    FeedPage,
    ProjectCreate,
    ProjectFeedItem,
    ProjectRead,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])

Username = Annotated[str, Path(pattern=USERNAME_REGEX, description="Owner's username")]
Slug = Annotated[str, Path(min_length=1, max_length=120, description="Project slug")]
Cursor = Annotated[str | None, Query(description="Cursor from a previous page")]
PageSize = Annotated[int, Query(ge=1, le=50, description="Max items to return")]


@router.get(
    "/feed",
    response_model=ApiResponse[FeedPage],
    summary="Project feed",
    description="Newest projects first, personalized for the viewer when authenticated.",
    responses={400: {"description": "Malformed cursor"}},
)
async def get_feed(
    viewer: OptionalUser,
    service: FeedServiceDep,
    cursor: Cursor = None,
    limit: PageSize = 10,
    tech_stack: Annotated[
        list[str] | None, Query(description="Technologies, repeated or comma-separated")
    ] = None,
    domain: Annotated[list[str] | None, Query(description="Domains, repeated or comma-separated")] = None,
    search: Annotated[str | None, Query(max_length=200, description="Title/description text")] = None,
) -> ApiResponse[FeedPage]:
    page = await service.get_project_feed(
        viewer.id if viewer else None,
        cursor=cursor,
        page_size=limit,
        tech_stack=tech_stack,
        domain=domain,
        search=search,
    )
    return ok("Projects fetched successfully", page)


@router.post(
    "",
    response_model=ApiResponse[ProjectRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={404: {"description": "Unknown contributor"}},
)
async def create_project(
    payload: ProjectCreate,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectRead]:
    project = await service.create_project(user.id, payload)
    return ok("Project created successfully", ProjectRead.model_validate(project))


@router.get("/mine", response_model=ApiResponse[FeedPage], summary="My projects")
async def list_my_projects(
    user: CurrentUser,
    service: FeedServiceDep,
    cursor: Cursor = None,
    limit: PageSize = 10,
) -> ApiResponse[FeedPage]:
    page = await service.list_owned_projects(user.id, cursor, limit)
    return ok("Projects fetched successfully", page)


@router.get(
    "/contributed",
    response_model=ApiResponse[FeedPage],
    summary="Projects I contribute to",
)
async def list_contributed_projects(
    user: CurrentUser,
    service: FeedServiceDep,
    cursor: Cursor = None,
    limit: PageSize = 10,
) -> ApiResponse[FeedPage]:
    page = await service.list_contributed_projects(user.id, cursor, limit)
    return ok("Projects fetched successfully", page)


@router.get(
    "/{username}/{slug}",
    response_model=ApiResponse[ProjectFeedItem],
    summary="Get project",
    responses={404: {"description": "Owner or project not found"}},
)
async def get_project(
    username: Username,
    slug: Slug,
    viewer: OptionalUser,
    service: FeedServiceDep,
) -> ApiResponse[ProjectFeedItem]:
    project = await service.get_project(viewer.id if viewer else None, username, slug)
    return ok("Project fetched successfully", project)


@router.patch(
    "/{username}/{slug}",
    response_model=ApiResponse[ProjectRead],
    summary="Update project",
    responses={
        403: {"description": "Not the project owner"},
        404: {"description": "Owner or project not found"},
    },
)
async def update_project(
    username: Username,
    slug: Slug,
    changes: ProjectUpdate,
    user: CurrentUser,
    service: ProjectServiceDep,
) -> ApiResponse[ProjectRead]:
    project = await service.update_project(user.id, username, slug, changes)
    return ok("Project updated successfully", ProjectRead.model_validate(project))
