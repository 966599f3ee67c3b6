"""Model exports.

Import from here: `from src.projecthub.models import Project, JoinRequest`
"""

from src.projecthub.models.collaboration import Collaboration
from src.projecthub.models.comment import Comment
from src.projecthub.models.enums import (
    DEFAULT_COLLABORATOR_ROLE,
    BookmarkAction,
    JoinRequestStatus,
    NotificationType,
    ProjectStatus,
    RespondAction,
)
from src.projecthub.models.join_request import JoinRequest
from src.projecthub.models.notification import Notification
from src.projecthub.models.project import Project
from src.projecthub.models.reaction import Bookmark, ProjectLike
from src.projecthub.models.user import User

__all__ = [
    # Enums
    "BookmarkAction",
    "DEFAULT_COLLABORATOR_ROLE",
    "JoinRequestStatus",
    "NotificationType",
    "ProjectStatus",
    "RespondAction",
    # Models
    "Bookmark",
    "Collaboration",
    "Comment",
    "JoinRequest",
    "Notification",
    "Project",
    "ProjectLike",
    "User",
]
