from uuid import UUID

from pydantic import BaseModel

from src.projecthub.models.enums import BookmarkAction


class LikeResult(BaseModel):
    project_id: UUID
    liked: bool
    like_count: int


class BookmarkToggle(BaseModel):
    action: BookmarkAction


class BookmarkResult(BaseModel):
    project_id: UUID
    action: BookmarkAction
    bookmarked: bool
