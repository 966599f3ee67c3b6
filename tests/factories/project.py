"""Project, join request and collaboration factories."""

from polyfactory import Use

from src.projecthub.models import (
    DEFAULT_COLLABORATOR_ROLE,
    Collaboration,
    JoinRequest,
    JoinRequestStatus,
    Project,
    ProjectStatus,
)
from tests.factories.base import BaseFactory, generate_uuid7, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data.

    ``owner_id`` must be set explicitly.
    """

    __model__ = Project

    id = Use(generate_uuid7)
    owner_id = None
    title = Use(lambda: f"Project {generate_uuid7().hex[-8:]}")
    slug = Use(lambda: f"project-{generate_uuid7().hex[-8:]}")
    description = "A project built for testing"
    domain = "Web"
    tech_stack = Use(lambda: ["Python", "FastAPI"])
    status = ProjectStatus.ONGOING.value
    looking_for_contributors = True
    project_photo = None
    github_url = None
    deployment_url = None
    demo_url = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def closed(cls, **kwargs):
        """Create a project that is not recruiting contributors."""
        return cls.build(looking_for_contributors=False, **kwargs)


class JoinRequestFactory(BaseFactory):
    """Factory for generating JoinRequest test data.

    ``project_id`` and ``requester_id`` must be set explicitly.
    """

    __model__ = JoinRequest

    id = Use(generate_uuid7)
    project_id = None
    requester_id = None
    message = "I'd like to help"
    role_requested = None
    status = JoinRequestStatus.PENDING.value
    reviewed_by = None
    reviewed_at = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)

    @classmethod
    def approved(cls, **kwargs):
        return cls.build(status=JoinRequestStatus.APPROVED.value, **kwargs)


class CollaborationFactory(BaseFactory):
    """Factory for generating Collaboration test data."""

    __model__ = Collaboration

    id = Use(generate_uuid7)
    project_id = None
    owner_id = None
    collaborator_id = None
    role = DEFAULT_COLLABORATOR_ROLE
    contribution_summary = ""
    request_id = None
    started_at = Use(utc_now)
    created_at = Use(utc_now)
    updated_at = Use(utc_now)
