"""FastAPI dependency injection definitions.

Re-exports all dependencies so routers import from one place.
"""

# Auth
from src.projecthub.api.dependencies.auth import (
    CurrentUser,
    OptionalUser,
    get_current_user,
    get_optional_user,
)

# Database
from src.projecthub.api.dependencies.db import DBSession, get_db_session

# Services
from src.projecthub.api.dependencies.services import (
    CommentServiceDep,
    FeedServiceDep,
    JoinRequestServiceDep,
    NotificationServiceDep,
    ProjectServiceDep,
    ReactionServiceDep,
)

__all__ = [
    # Auth
    "CurrentUser",
    "OptionalUser",
    "get_current_user",
    "get_optional_user",
    # Database
    "DBSession",
    "get_db_session",
    # Services
    "CommentServiceDep",
    "FeedServiceDep",
    "JoinRequestServiceDep",
    "NotificationServiceDep",
    "ProjectServiceDep",
    "ReactionServiceDep",
]
