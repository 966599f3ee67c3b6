"""Shared enums for models."""

from enum import Enum


class ProjectStatus(str, Enum):
    """Project lifecycle status."""

    ONGOING = "ongoing"
    COMPLETED = "completed"


class JoinRequestStatus(str, Enum):
    """Join request state. Every state except PENDING is terminal."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class RespondAction(str, Enum):
    """Owner decision on a pending join request."""

    ACCEPT = "accept"
    REJECT = "reject"


class BookmarkAction(str, Enum):
    """Explicit bookmark mutation."""

    ADD = "add"
    REMOVE = "remove"


class NotificationType(str, Enum):
    """Kinds of in-app notifications."""

    REQUEST_RECEIVED = "request_received"
    REQUEST_APPROVED = "request_approved"
    REQUEST_REJECTED = "request_rejected"
    REQUEST_CANCELLED = "request_cancelled"


DEFAULT_COLLABORATOR_ROLE = "Contributor"
