from src.projecthub.services.comment_service import CommentService
from src.projecthub.services.feed_service import FeedService
from src.projecthub.services.join_request_service import JoinRequestService
from src.projecthub.services.notification_service import NotificationService
from src.projecthub.services.project_service import ProjectService
from src.projecthub.services.reaction_service import ReactionService

__all__ = [
    "CommentService",
    "FeedService",
    "JoinRequestService",
    "NotificationService",
    "ProjectService",
    "ReactionService",
]
