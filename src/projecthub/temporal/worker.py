"""
Temporal Worker - Separate process from API.

Run with:
    python -m src.projecthub.temporal.worker
    python -m src.projecthub.temporal.worker --health-port 8002
"""

import argparse
import asyncio

import uvicorn
from fastapi import FastAPI
from temporalio.client import Client
from temporalio.exceptions import WorkflowAlreadyStartedError
from temporalio.worker import Worker

from src.projecthub.core.config import get_settings
from src.projecthub.core.db import dispose_engine
from src.projecthub.core.logging import get_logger, setup_logging
from src.projecthub.temporal.activities import reconcile_approved_requests
from src.projecthub.temporal.workflows import CollaborationReconciliationWorkflow

logger = get_logger(__name__)

WORKER_HEALTH_PORT = 8001
RECONCILIATION_WORKFLOW_ID = "collaboration-reconciliation"


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Temporal worker")
    parser.add_argument(
        "--health-port",
        type=int,
        default=WORKER_HEALTH_PORT,
        help=f"Port for the health server (default: {WORKER_HEALTH_PORT})",
    )
    return parser.parse_args()


def create_worker(client: Client, task_queue: str) -> Worker:
    """Create the jobs worker.

    Jobs are short database sweeps, so concurrency stays modest.
    """
    return Worker(
        client,
        task_queue=task_queue,
        workflows=[CollaborationReconciliationWorkflow],
        activities=[reconcile_approved_requests],
        max_concurrent_activities=10,
        max_concurrent_workflow_tasks=10,
    )


async def schedule_reconciliation(client: Client) -> None:
    """Start the reconciliation cron workflow if RECONCILE_SCHEDULE is set."""
    settings = get_settings()
    if not settings.reconcile_schedule:
        logger.info("Reconciliation schedule not configured")
        return

    try:
        await client.start_workflow(
            CollaborationReconciliationWorkflow.run,
            settings.reconcile_batch_size,
            id=RECONCILIATION_WORKFLOW_ID,
            task_queue=settings.temporal_task_queue,
            cron_schedule=settings.reconcile_schedule,
        )
        logger.info("Reconciliation scheduled", schedule=settings.reconcile_schedule)
    except WorkflowAlreadyStartedError:
        logger.info("Reconciliation already scheduled", workflow_id=RECONCILIATION_WORKFLOW_ID)


async def run_health_server(task_queue: str, port: int = WORKER_HEALTH_PORT) -> None:
    """Run a lightweight health server for K8s probes."""
    health_app = FastAPI(title="Temporal Worker Health")

    @health_app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "service": "temporal-worker",
            "task_queue": task_queue,
        }

    @health_app.get("/ready")
    async def ready() -> dict[str, str]:
        return {"status": "ready"}

    config = uvicorn.Config(
        health_app,
        host="0.0.0.0",
        port=port,
        log_level="warning",
    )
    server = uvicorn.Server(config)
    logger.info(f"Starting health server on port {port}")
    await server.serve()


async def main() -> None:
    """Main entry point for the Temporal worker."""
    args = parse_args()
    settings = get_settings()
    setup_logging(settings.debug)

    client = await Client.connect(
        settings.temporal_host,
        namespace=settings.temporal_namespace,
    )
    worker = create_worker(client, settings.temporal_task_queue)
    logger.info(f"Starting jobs worker on queue: {settings.temporal_task_queue}")

    try:
        health_task = asyncio.create_task(
            run_health_server(settings.temporal_task_queue, args.health_port)
        )
        await schedule_reconciliation(client)
        await worker.run()
        await health_task
    finally:
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
