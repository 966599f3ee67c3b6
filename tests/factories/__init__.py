"""Test factories for generating test data.

Re-exports all factories for convenient imports:
    from tests.factories import UserFactory, ProjectFactory, ...
"""

from tests.factories.base import BaseFactory, generate_uuid7, utc_now
from tests.factories.project import CollaborationFactory, JoinRequestFactory, ProjectFactory
from tests.factories.user import UserFactory

__all__ = [
    # Base
    "BaseFactory",
    "generate_uuid7",
    "utc_now",
    # User
    "UserFactory",
    # Project
    "CollaborationFactory",
    "JoinRequestFactory",
    "ProjectFactory",
]
