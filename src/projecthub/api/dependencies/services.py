"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.projecthub.api.dependencies.db import DBSession
from src.projecthub.api.dependencies.repositories import (
    CollaborationRepo,
    CommentRepo,
    FeedRepo,
    JoinRequestRepo,
    NotificationRepo,
    ProjectRepo,
    ReactionRepo,
    UserRepo,
)
from src.projecthub.services import (
    CommentService,
    FeedService,
    JoinRequestService,
    NotificationService,
    ProjectService,
    ReactionService,
)


def get_join_request_service(
    join_request_repo: JoinRequestRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    collaboration_repo: CollaborationRepo,
    notification_repo: NotificationRepo,
    session: DBSession,
) -> JoinRequestService:
    return JoinRequestService(
        join_request_repo,
        project_repo,
        user_repo,
        collaboration_repo,
        notification_repo,
        session,
    )


def get_feed_service(
    feed_repo: FeedRepo,
    collaboration_repo: CollaborationRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
) -> FeedService:
    """Read-only; needs no session handle of its own."""
    return FeedService(feed_repo, collaboration_repo, project_repo, user_repo)


def get_project_service(
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    collaboration_repo: CollaborationRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, user_repo, collaboration_repo, session)


def get_reaction_service(
    reaction_repo: ReactionRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> ReactionService:
    return ReactionService(reaction_repo, project_repo, session)


def get_comment_service(
    comment_repo: CommentRepo,
    project_repo: ProjectRepo,
    user_repo: UserRepo,
    session: DBSession,
) -> CommentService:
    return CommentService(comment_repo, project_repo, user_repo, session)


def get_notification_service(
    notification_repo: NotificationRepo,
    session: DBSession,
) -> NotificationService:
    return NotificationService(notification_repo, session)


JoinRequestServiceDep = Annotated[JoinRequestService, Depends(get_join_request_service)]
FeedServiceDep = Annotated[FeedService, Depends(get_feed_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
ReactionServiceDep = Annotated[ReactionService, Depends(get_reaction_service)]
CommentServiceDep = Annotated[CommentService, Depends(get_comment_service)]
NotificationServiceDep = Annotated[NotificationService, Depends(get_notification_service)]
