from fastapi import APIRouter

from src.projecthub.api.v1 import comments, join_requests, notifications, projects, reactions

api_router = APIRouter(prefix="/api/v1")
# Id-based project routes first so /projects/{id}/comments never reaches /projects/{username}/{slug}
api_router.include_router(comments.router)
api_router.include_router(reactions.router)
api_router.include_router(join_requests.router)
api_router.include_router(projects.router)
api_router.include_router(notifications.router)
