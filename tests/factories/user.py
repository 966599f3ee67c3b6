"""User factory for test data generation."""

from polyfactory import Use

from src.projecthub.models import User
from tests.factories.base import BaseFactory, generate_uuid7, utc_now


def _short_suffix() -> str:
    return generate_uuid7().hex[-8:]


class UserFactory(BaseFactory):
    """Factory for generating User test data."""

    __model__ = User

    id = Use(generate_uuid7)
    username = Use(lambda: f"user_{_short_suffix()}")
    name = "Test User"
    email = Use(lambda: f"user_{_short_suffix()}@example.com")
    profile_photo = None
    summary = None
    is_active = True
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def inactive(cls, **kwargs):
        """Create an inactive user."""
        return cls.build(is_active=False, **kwargs)
