"""
Background worker for running scheduled jobs.

Usage:
    python -m civimember.worker

The worker wakes up periodically, runs every active scheduled job whose run
frequency says it is due, and stamps last_run on success.
"""

import asyncio
import logging
import os
from datetime import datetime, timezone

from civimember.core.config import settings
from civimember.db.session import SessionLocal
from civimember.jobs.registry import job_handler_key, resolve_job_handler
from civimember.services import scheduled_job_service

logger = logging.getLogger(__name__)

# Worker configuration
POLL_INTERVAL_SECONDS = int(os.getenv("WORKER_POLL_INTERVAL", "60"))


async def process_job(db, job) -> None:
    """Run a single scheduled job through its registered handler."""
    handler = resolve_job_handler(job_handler_key(job.api_entity, job.api_action))
    logger.info("Processing scheduled job %s (%s.%s)", job.id, job.api_entity, job.api_action)
    await handler(db, job)


async def run_due_jobs(db, domain_id: int | None = None, now: datetime | None = None) -> dict:
    """
    Run every due job of the domain once.

    Jobs without a registered handler are skipped. A failing job is logged
    and counted; it doesn't stop the others and its last_run stays unchanged.
    """
    domain_id = settings.DEFAULT_DOMAIN_ID if domain_id is None else domain_id
    now = now or datetime.now(timezone.utc)
    stats = {"jobs_run": 0, "jobs_failed": 0, "jobs_skipped": 0}

    for job in scheduled_job_service.get_due_jobs(db, domain_id, now):
        try:
            resolve_job_handler(job_handler_key(job.api_entity, job.api_action))
        except ValueError:
            logger.debug("No handler for scheduled job %s (%s)", job.id, job.api_action)
            stats["jobs_skipped"] += 1
            continue

        try:
            await process_job(db, job)
            scheduled_job_service.mark_job_run(db, job, now)
            stats["jobs_run"] += 1
        except Exception:
            db.rollback()
            logger.exception("Scheduled job %s failed", job.id)
            stats["jobs_failed"] += 1

    return stats


async def worker_loop() -> None:
    """Main worker loop - runs due jobs every poll interval."""
    logger.info("Worker starting (poll interval: %ss)", POLL_INTERVAL_SECONDS)

    while True:
        with SessionLocal() as db:
            try:
                stats = await run_due_jobs(db)
                logger.info(
                    "Worker pass complete (run=%s failed=%s skipped=%s)",
                    stats["jobs_run"],
                    stats["jobs_failed"],
                    stats["jobs_skipped"],
                )
            except Exception:
                logger.exception("Error in worker loop")

        await asyncio.sleep(POLL_INTERVAL_SECONDS)


def main() -> None:
    """Entry point for the worker."""
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    try:
        asyncio.run(worker_loop())
    except KeyboardInterrupt:
        logger.info("Worker shutting down")


if __name__ == "__main__":
    main()
