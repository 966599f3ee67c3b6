from src.projecthub.schemas.comment import CommentCreate, CommentRead
from src.projecthub.schemas.envelope import ApiResponse, ok
from src.projecthub.schemas.join_request import (
    JoinRequestCreate,
    JoinRequestRead,
    JoinRequestView,
    RespondOutcome,
    RespondRequest,
)
from src.projecthub.schemas.notification import NotificationRead
from src.projecthub.schemas.pagination import PaginatedResponse
from src.projecthub.schemas.project import (
    ContributorInput,
    ContributorView,
    FeedPage,
    ProjectCreate,
    ProjectFeedItem,
    ProjectRead,
    ProjectUpdate,
)
from src.projecthub.schemas.reaction import BookmarkResult, BookmarkToggle, LikeResult
from src.projecthub.schemas.user import UserSummary

__all__ = [
    # Envelope
    "ApiResponse",
    "ok",
    "PaginatedResponse",
    # Comment
    "CommentCreate",
    "CommentRead",
    # Join request
    "JoinRequestCreate",
    "JoinRequestRead",
    "JoinRequestView",
    "RespondOutcome",
    "RespondRequest",
    # Notification
    "NotificationRead",
    # Project
    "ContributorInput",
    "ContributorView",
    "FeedPage",
    "ProjectCreate",
    "ProjectFeedItem",
    "ProjectRead",
    "ProjectUpdate",
    # Reaction
    "BookmarkResult",
    "BookmarkToggle",
    "LikeResult",
    # User
    "UserSummary",
]
