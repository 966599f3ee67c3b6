"""Slug derivation and the public username pattern."""

import re
import unicodedata
from collections.abc import Iterable
from typing import Final

MAX_SLUG_LENGTH: Final[int] = 120
DEFAULT_SLUG: Final[str] = "project"
USERNAME_REGEX: Final[str] = r"^[A-Za-z0-9_-]{3,30}$"

_NON_SLUG_CHARS: Final[re.Pattern[str]] = re.compile(r"[^a-z0-9]+")


def slugify_title(title: str) -> str:
    """Derive the URL-safe base slug for a project title.

    Accents are folded to ASCII, everything else that is not a lowercase
    letter or digit collapses into single hyphens.

    Examples:
        >>> slugify_title("  My Cool App! ")
        'my-cool-app'
        >>> slugify_title("Café Finder 2.0")
        'cafe-finder-2-0'
        >>> slugify_title("!!!")
        'project'
    """
    folded = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", folded.lower()).strip("-")
    slug = slug[:MAX_SLUG_LENGTH].rstrip("-")
    return slug or DEFAULT_SLUG


def derive_slug(title: str, taken: Iterable[str]) -> str:
    """Derive a slug for ``title`` that does not collide with ``taken``.

    ``taken`` holds the owner's existing slugs; comparison is
    case-insensitive. Collisions get ``-2``, ``-3``, ... appended.
    """
    base = slugify_title(title)
    existing = {slug.lower() for slug in taken}
    if base not in existing:
        return base

    suffix = 2
    while True:
        tail = f"-{suffix}"
        candidate = f"{base[: MAX_SLUG_LENGTH - len(tail)]}{tail}"
        if candidate not in existing:
            return candidate
        suffix += 1
