"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projecthub.api.dependencies.db import DBSession
from src.projecthub.repositories import (
    CollaborationRepository,
    CommentRepository,
    FeedRepository,
    JoinRequestRepository,
    NotificationRepository,
    ProjectRepository,
    ReactionRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_collaboration_repository(session: DBSession) -> CollaborationRepository:
    return CollaborationRepository(session)


def get_join_request_repository(session: DBSession) -> JoinRequestRepository:
    return JoinRequestRepository(session)


def get_feed_repository(session: DBSession) -> FeedRepository:
    return FeedRepository(session)


def get_reaction_repository(session: DBSession) -> ReactionRepository:
    return ReactionRepository(session)


def get_comment_repository(session: DBSession) -> CommentRepository:
    return CommentRepository(session)


def get_notification_repository(session: DBSession) -> NotificationRepository:
    return NotificationRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
CollaborationRepo = Annotated[CollaborationRepository, Depends(get_collaboration_repository)]
JoinRequestRepo = Annotated[JoinRequestRepository, Depends(get_join_request_repository)]
FeedRepo = Annotated[FeedRepository, Depends(get_feed_repository)]
ReactionRepo = Annotated[ReactionRepository, Depends(get_reaction_repository)]
CommentRepo = Annotated[CommentRepository, Depends(get_comment_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
