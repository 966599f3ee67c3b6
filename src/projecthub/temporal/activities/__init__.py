"""Temporal activities for background jobs."""

from src.projecthub.temporal.activities.reconciliation import reconcile_approved_requests

__all__ = ["reconcile_approved_requests"]
