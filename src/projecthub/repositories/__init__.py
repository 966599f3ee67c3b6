from src.projecthub.repositories.base import BaseRepository
from src.projecthub.repositories.collaboration import CollaborationRepository
from src.projecthub.repositories.comment import CommentRepository
from src.projecthub.repositories.feed import FeedRepository, ProjectRecord
from src.projecthub.repositories.join_request import JoinRequestRepository
from src.projecthub.repositories.notification import NotificationRepository
from src.projecthub.repositories.project import ProjectRepository
from src.projecthub.repositories.reaction import ReactionRepository
from src.projecthub.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CollaborationRepository",
    "CommentRepository",
    "FeedRepository",
    "JoinRequestRepository",
    "NotificationRepository",
    "ProjectRecord",
    "ProjectRepository",
    "ReactionRepository",
    "UserRepository",
]
