"""
Collaboration Reconciliation Workflow.

Repairs approved join requests that have no collaboration row. Designed to be
run on a schedule via Temporal cron (see RECONCILE_SCHEDULE).
"""

from datetime import timedelta

from temporalio import workflow
from temporalio.common import RetryPolicy

with workflow.unsafe.imports_passed_through():
    from src.projecthub.temporal.activities import reconcile_approved_requests


@workflow.defn
class CollaborationReconciliationWorkflow:
    """Run the reconciliation activity until a pass repairs less than a full batch."""

    @workflow.run
    async def run(self, batch_size: int = 500, max_batches: int = 20) -> int:
        """
        Args:
            batch_size: Requests repaired per activity call
            max_batches: Upper bound on activity calls in one run

        Returns:
            Total number of collaborations created
        """
        workflow.logger.info(f"Starting collaboration reconciliation (batch size: {batch_size})")

        total = 0
        for _ in range(max_batches):
            created = await workflow.execute_activity(
                reconcile_approved_requests,
                batch_size,
                start_to_close_timeout=timedelta(minutes=5),
                retry_policy=RetryPolicy(
                    maximum_attempts=3,
                    initial_interval=timedelta(seconds=2),
                ),
            )
            total += created
            if created < batch_size:
                break

        workflow.logger.info(f"Collaboration reconciliation complete: {total} created")
        return total
