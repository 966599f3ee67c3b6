"""Repository for User entity."""

from uuid import UUID

from sqlmodel import select

from src.projecthub.models import User
from src.projecthub.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_username(self, username: str) -> User | None:
        """Get active user by exact username."""
        result = await self.session.execute(
            select(User).where(User.username == username, User.is_active == True)  # noqa: E712
        )
        return result.scalar_one_or_none()

    async def get_by_ids(self, ids: list[UUID]) -> dict[UUID, User]:
        """Fetch several users in one query, keyed by id."""
        if not ids:
            return {}
        result = await self.session.execute(
            select(User).where(User.id.in_(ids))  # type: ignore[attr-defined]
        )
        return {user.id: user for user in result.scalars().all()}
