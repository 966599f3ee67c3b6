"""Tests for the collaboration reconciliation workflow and activity."""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid7

import pytest
from temporalio import activity
from temporalio.testing import ActivityEnvironment, WorkflowEnvironment
from temporalio.worker import Worker

from src.projecthub.temporal.activities import reconcile_approved_requests
from src.projecthub.temporal.workflows import CollaborationReconciliationWorkflow

pytestmark = pytest.mark.unit

TASK_QUEUE = "test-reconciliation"


def _fake_activity(results: list[int], calls: list[int]):
    """Stand-in activity registered under the real activity's name."""

    @activity.defn(name="reconcile_approved_requests")
    async def fake(batch_size: int) -> int:
        calls.append(batch_size)
        return results.pop(0) if results else 0

    return fake


class TestCollaborationReconciliationWorkflow:
    async def _run(self, results: list[int], **kwargs) -> tuple[int, list[int]]:
        calls: list[int] = []
        async with await WorkflowEnvironment.start_time_skipping() as env:  # noqa: SIM117
            async with Worker(
                env.client,
                task_queue=TASK_QUEUE,
                workflows=[CollaborationReconciliationWorkflow],
                activities=[_fake_activity(results, calls)],
            ):
                total = await env.client.execute_workflow(
                    CollaborationReconciliationWorkflow.run,
                    args=[kwargs.get("batch_size", 10), kwargs.get("max_batches", 20)],
                    id=f"reconcile-test-{uuid7()}",
                    task_queue=TASK_QUEUE,
                )
        return total, calls

    async def test_stops_after_partial_batch(self) -> None:
        total, calls = await self._run([10, 10, 4], batch_size=10)

        assert total == 24
        assert calls == [10, 10, 10]

    async def test_single_pass_when_nothing_to_repair(self) -> None:
        total, calls = await self._run([0], batch_size=10)

        assert total == 0
        assert len(calls) == 1

    async def test_respects_max_batches(self) -> None:
        total, calls = await self._run([5, 5, 5, 5], batch_size=5, max_batches=2)

        assert total == 10
        assert len(calls) == 2


class TestReconcileActivity:
    async def test_runs_service_in_its_own_session(self) -> None:
        session = MagicMock()

        @asynccontextmanager
        async def fake_get_session():
            yield session

        service = MagicMock()
        service.reconcile_approved_requests = AsyncMock(return_value=3)

        with (
            patch(
                "src.projecthub.temporal.activities.reconciliation.get_session",
                fake_get_session,
            ),
            patch(
                "src.projecthub.temporal.activities.reconciliation.JoinRequestService",
                return_value=service,
            ) as service_cls,
        ):
            created = await ActivityEnvironment().run(reconcile_approved_requests, 50)

        assert created == 3
        service.reconcile_approved_requests.assert_awaited_once_with(50)
        assert service_cls.call_args.args[-1] is session
