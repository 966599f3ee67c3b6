"""Tests for CommentService and NotificationService."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.models import Comment
from src.projecthub.schemas.comment import CommentCreate
from src.projecthub.services.comment_service import CommentService
from src.projecthub.services.notification_service import NotificationService
from tests.factories import UserFactory

pytestmark = pytest.mark.unit


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


class TestCommentService:
    @pytest.fixture
    def author(self):
        return UserFactory.build(username="carol")

    @pytest.fixture
    def service(self, session, author) -> CommentService:
        project_repo = MagicMock()
        project_repo.exists = AsyncMock(return_value=True)
        user_repo = MagicMock()
        user_repo.get_by_id = AsyncMock(return_value=author)
        comment_repo = MagicMock()
        comment_repo.list_for_project = AsyncMock(return_value=([], None, False))
        return CommentService(comment_repo, project_repo, user_repo, session)

    async def test_add_comment(self, service, session, author) -> None:
        project_id = uuid7()

        comment = await service.add_comment(author.id, project_id, "Looks great")

        (added,) = [c.args[0] for c in service.comment_repo.add.call_args_list]
        assert isinstance(added, Comment)
        assert comment.id == added.id
        assert comment.project_id == project_id
        assert comment.author.username == "carol"
        session.commit.assert_awaited_once()

    async def test_missing_project(self, service, session, author) -> None:
        service.project_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            await service.add_comment(author.id, uuid7(), "Hello")

        service.comment_repo.add.assert_not_called()
        session.rollback.assert_awaited_once()

    async def test_list_missing_project(self, service) -> None:
        service.project_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            await service.list_comments(uuid7(), None, 20)

    def test_blank_content_rejected(self) -> None:
        with pytest.raises(ValueError):
            CommentCreate(content="   ")


class TestNotificationService:
    async def test_mark_read(self, session) -> None:
        repo = MagicMock()
        repo.mark_read = AsyncMock(return_value=True)

        await NotificationService(repo, session).mark_read(uuid7(), uuid7())

        session.commit.assert_awaited_once()

    async def test_mark_read_of_someone_elses_notification(self, session) -> None:
        repo = MagicMock()
        repo.mark_read = AsyncMock(return_value=False)

        with pytest.raises(NotFoundError):
            await NotificationService(repo, session).mark_read(uuid7(), uuid7())

        session.rollback.assert_awaited_once()
