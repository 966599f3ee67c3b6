"""Pagination schemas and keyset cursor helpers."""

import base64
from datetime import datetime
from typing import Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, Field

from src.projecthub.core.exceptions import InvalidStateError

T = TypeVar("T")

_CURSOR_SEPARATOR = "|"


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response with cursor-based pagination.

    The cursor is an opaque string that encodes the position in the result set.
    Clients should treat it as an opaque token and pass it back to get the next page.
    """

    items: list[T]
    next_cursor: str | None = Field(
        default=None,
        description="Opaque cursor for fetching the next page. None if no more pages.",
    )
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )


def encode_cursor(value: str) -> str:
    """Encode a cursor value to URL-safe base64."""
    return base64.urlsafe_b64encode(value.encode()).decode()


def decode_cursor(cursor: str) -> str:
    """Decode a base64 cursor value.

    Raises:
        ValueError: If cursor is invalid
    """
    try:
        return base64.urlsafe_b64decode(cursor.encode()).decode()
    except Exception as e:
        raise ValueError("Invalid cursor") from e


def encode_keyset_cursor(created_at: datetime, id: UUID) -> str:
    """Encode the (created_at, id) position of the last returned item."""
    return encode_cursor(f"{created_at.isoformat()}{_CURSOR_SEPARATOR}{id}")


def decode_keyset_cursor(cursor: str) -> tuple[datetime, UUID]:
    """Decode a keyset cursor back into its (created_at, id) position.

    Raises:
        InvalidStateError: If the token is not a cursor this API produced.
    """
    try:
        raw = decode_cursor(cursor)
        created_part, id_part = raw.split(_CURSOR_SEPARATOR)
        return datetime.fromisoformat(created_part), UUID(id_part)
    except ValueError as e:
        raise InvalidStateError("Invalid cursor") from e
