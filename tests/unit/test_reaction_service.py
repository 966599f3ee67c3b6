"""Tests for ReactionService likes and bookmarks."""

from unittest.mock import AsyncMock, MagicMock
from uuid import uuid7

import pytest

from src.projecthub.core.exceptions import NotFoundError
from src.projecthub.models import BookmarkAction
from src.projecthub.services.reaction_service import ReactionService

pytestmark = pytest.mark.unit


@pytest.fixture
def session() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def reaction_repo() -> AsyncMock:
    repo = AsyncMock()
    repo.count_likes.return_value = 1
    return repo


@pytest.fixture
def project_repo() -> MagicMock:
    repo = MagicMock()
    repo.exists = AsyncMock(return_value=True)
    return repo


@pytest.fixture
def service(reaction_repo, project_repo, session) -> ReactionService:
    return ReactionService(reaction_repo, project_repo, session)


class TestLikes:
    async def test_like_returns_count(self, service, reaction_repo, session) -> None:
        viewer_id, project_id = uuid7(), uuid7()

        result = await service.like(viewer_id, project_id)

        reaction_repo.add_like.assert_awaited_once_with(project_id, viewer_id)
        assert result.liked is True
        assert result.like_count == 1
        session.commit.assert_awaited_once()

    async def test_unlike_returns_count(self, service, reaction_repo) -> None:
        reaction_repo.count_likes.return_value = 0

        result = await service.unlike(uuid7(), uuid7())

        reaction_repo.remove_like.assert_awaited_once()
        assert result.liked is False
        assert result.like_count == 0

    async def test_like_missing_project(self, service, project_repo, reaction_repo, session) -> None:
        project_repo.exists.return_value = False

        with pytest.raises(NotFoundError):
            await service.like(uuid7(), uuid7())

        reaction_repo.add_like.assert_not_awaited()
        session.rollback.assert_awaited_once()


class TestBookmarks:
    async def test_add(self, service, reaction_repo) -> None:
        viewer_id, project_id = uuid7(), uuid7()

        result = await service.toggle_bookmark(viewer_id, project_id, BookmarkAction.ADD)

        reaction_repo.add_bookmark.assert_awaited_once_with(viewer_id, project_id)
        reaction_repo.remove_bookmark.assert_not_awaited()
        assert result.bookmarked is True

    async def test_remove(self, service, reaction_repo) -> None:
        viewer_id, project_id = uuid7(), uuid7()

        result = await service.toggle_bookmark(viewer_id, project_id, BookmarkAction.REMOVE)

        reaction_repo.remove_bookmark.assert_awaited_once_with(viewer_id, project_id)
        assert result.bookmarked is False
        assert result.action == BookmarkAction.REMOVE

    async def test_repository_error_rolls_back(self, service, reaction_repo, session) -> None:
        reaction_repo.add_bookmark.side_effect = RuntimeError("db down")

        with pytest.raises(RuntimeError):
            await service.toggle_bookmark(uuid7(), uuid7(), BookmarkAction.ADD)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_awaited()
