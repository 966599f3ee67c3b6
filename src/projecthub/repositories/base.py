"""Base repository with common CRUD operations and keyset pagination."""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any
from uuid import UUID

from sqlalchemy import tuple_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

from src.projecthub.schemas.pagination import decode_keyset_cursor, encode_keyset_cursor


def apply_keyset(query: Any, cursor: str | None, limit: int, created_field: Any, id_field: Any) -> Any:
    """Order newest first on (created_at, id) and resume strictly after ``cursor``.

    Fetches ``limit + 1`` rows so the caller can tell whether another page exists.

    Raises:
        InvalidStateError: If the cursor is malformed.
    """
    if cursor:
        created_at, last_id = decode_keyset_cursor(cursor)
        query = query.where(tuple_(created_field, id_field) < tuple_(created_at, last_id))
    return query.order_by(created_field.desc(), id_field.desc()).limit(limit + 1)


def split_page[T](
    rows: Sequence[T],
    limit: int,
    position: Callable[[T], tuple[datetime, UUID]],
) -> tuple[list[T], str | None, bool]:
    """Trim the look-ahead row and build the cursor from the last returned item.

    Returns:
        Tuple of (items, next_cursor, has_more)
    """
    items = list(rows)
    has_more = len(items) > limit
    if has_more:
        items = items[:limit]

    next_cursor = None
    if has_more and items:
        next_cursor = encode_keyset_cursor(*position(items[-1]))
    return items, next_cursor, has_more


class BaseRepository[ModelType: SQLModel]:
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    should be done in the service layer.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its primary key."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == id)  # type: ignore[attr-defined]
        )
        return result.scalar_one_or_none()

    def add(self, entity: ModelType) -> None:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)

    async def paginate(
        self,
        query: Any,
        cursor: str | None,
        limit: int,
    ) -> tuple[list[ModelType], str | None, bool]:
        """Execute keyset pagination on a single-entity query.

        The model must expose ``created_at`` and ``id``; rows come back
        newest first with ``id`` breaking ties.

        Returns:
            Tuple of (items, next_cursor, has_more)
        """
        query = apply_keyset(
            query,
            cursor,
            limit,
            self.model.created_at,  # type: ignore[attr-defined]
            self.model.id,  # type: ignore[attr-defined]
        )
        result = await self.session.execute(query)
        return split_page(
            result.scalars().all(),
            limit,
            lambda item: (item.created_at, item.id),  # type: ignore[attr-defined]
        )
