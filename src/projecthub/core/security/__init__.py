"""Security utilities - token verification and validators.

Re-exports all security-related functions for convenience.
"""

from src.projecthub.core.security.crypto import (
    TokenType,
    create_access_token,
    decode_token,
)
from src.projecthub.core.security.validators import (
    USERNAME_REGEX,
    derive_slug,
    slugify_title,
)

__all__ = [
    # Crypto
    "TokenType",
    "create_access_token",
    "decode_token",
    # Validators
    "USERNAME_REGEX",
    "derive_slug",
    "slugify_title",
]
