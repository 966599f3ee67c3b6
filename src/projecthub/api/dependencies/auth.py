"""Authentication dependencies.

Bearer tokens are issued by the identity provider; we verify the signature,
check the ``type`` claim and load the user named by ``sub``.
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header

from src.projecthub.api.dependencies.repositories import UserRepo
from src.projecthub.core.exceptions import UnauthorizedError
from src.projecthub.core.logging import bind_user_context
from src.projecthub.core.security import TokenType, decode_token
from src.projecthub.models import User
from src.projecthub.repositories import UserRepository


async def _validate_access_token(authorization: str, user_repo: UserRepository) -> User:
    """Validate a bearer header and return the active user it names."""
    if not authorization.startswith("Bearer "):
        raise UnauthorizedError("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise UnauthorizedError("Invalid or expired token")

    if payload.get("type") != TokenType.ACCESS:
        raise UnauthorizedError("Invalid token type")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid token payload")

    try:
        user_uuid = UUID(user_id)
    except ValueError as e:
        raise UnauthorizedError("Invalid user_id in token") from e

    user = await user_repo.get_by_id(user_uuid)
    if user is None or not user.is_active:
        raise UnauthorizedError("User not found or inactive")

    bind_user_context(user.id, user.username)
    return user


async def get_current_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Require an authenticated viewer."""
    if not authorization:
        raise UnauthorizedError("Missing or invalid authorization header")
    return await _validate_access_token(authorization, user_repo)


CurrentUser = Annotated[User, Depends(get_current_user)]


async def get_optional_user(
    user_repo: UserRepo,
    authorization: Annotated[str | None, Header()] = None,
) -> User | None:
    """Viewer for endpoints that also serve anonymous visitors.

    No header means anonymous. A header that fails validation is still a 401
    rather than a silent downgrade.
    """
    if not authorization:
        return None
    return await _validate_access_token(authorization, user_repo)


OptionalUser = Annotated[User | None, Depends(get_optional_user)]
