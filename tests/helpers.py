"""Shared helpers for tests."""

from uuid import UUID

from src.projecthub.core.security import create_access_token


def auth_headers(user_id: UUID | str) -> dict[str, str]:
    """Bearer header for a user, as the identity provider would issue it."""
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
