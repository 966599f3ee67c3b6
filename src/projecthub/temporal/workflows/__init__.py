"""Temporal workflows."""

from src.projecthub.temporal.workflows.reconciliation import CollaborationReconciliationWorkflow

__all__ = ["CollaborationReconciliationWorkflow"]
