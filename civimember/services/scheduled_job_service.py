"""Scheduled job service - installing, listing and timing periodic jobs."""

import logging
from datetime import datetime, timedelta, timezone
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from civimember.db.enums import RunFrequency
from civimember.db.models import ScheduledJob
from civimember.jobs.seed import DEFAULT_SCHEDULED_JOBS, ScheduledJobDefinition


logger = logging.getLogger(__name__)

# Minimum time between runs per frequency; Always runs on every pass
RUN_INTERVALS: dict[str, timedelta] = {
    RunFrequency.ALWAYS.value: timedelta(0),
    RunFrequency.HOURLY.value: timedelta(hours=1),
    RunFrequency.DAILY.value: timedelta(days=1),
}


class ScheduledJobNotFoundError(Exception):
    """Scheduled job not found."""

    pass


def install_default_jobs(
    db: Session,
    domain_id: int,
    definitions: Iterable[ScheduledJobDefinition] = DEFAULT_SCHEDULED_JOBS,
) -> list[ScheduledJob]:
    """
    Insert any seed job missing from the domain.

    Existing rows (same domain, api_entity and api_action) are left alone so
    administrator changes survive re-installs. Returns the created rows.
    """
    existing = set(
        db.execute(
            select(ScheduledJob.api_entity, ScheduledJob.api_action).where(
                ScheduledJob.domain_id == domain_id
            )
        ).all()
    )

    created = []
    for definition in definitions:
        if (definition.api_entity, definition.api_action) in existing:
            continue
        job = ScheduledJob(
            domain_id=domain_id,
            run_frequency=definition.run_frequency.value,
            last_run=None,
            name=definition.name,
            description=definition.description,
            api_entity=definition.api_entity,
            api_action=definition.api_action,
            parameters=definition.parameters,
            is_active=definition.is_active,
        )
        db.add(job)
        created.append(job)

    db.commit()
    logger.info("Installed %s scheduled jobs for domain %s", len(created), domain_id)
    return created


def list_jobs(db: Session, domain_id: int, active: bool | None = None) -> list[ScheduledJob]:
    """List a domain's jobs with an optional is_active filter."""
    stmt = select(ScheduledJob).where(ScheduledJob.domain_id == domain_id)
    if active is not None:
        stmt = stmt.where(ScheduledJob.is_active.is_(active))
    return list(db.execute(stmt.order_by(ScheduledJob.id)).scalars().all())


def get_job(db: Session, job_id: int) -> ScheduledJob:
    job = db.get(ScheduledJob, job_id)
    if job is None:
        raise ScheduledJobNotFoundError(f"Scheduled job {job_id} not found")
    return job


def set_job_active(db: Session, job_id: int, is_active: bool) -> ScheduledJob:
    job = get_job(db, job_id)
    job.is_active = is_active
    db.commit()
    db.refresh(job)
    return job


def is_job_due(job: ScheduledJob, now: datetime) -> bool:
    """Whether enough time has passed since the job's last run."""
    if job.last_run is None:
        return True
    last_run = job.last_run if job.last_run.tzinfo else job.last_run.replace(tzinfo=timezone.utc)
    interval = RUN_INTERVALS.get(job.run_frequency)
    if interval is None:
        logger.warning(
            "Scheduled job %s has unknown run_frequency '%s'; treating as Daily",
            job.id,
            job.run_frequency,
        )
        interval = RUN_INTERVALS[RunFrequency.DAILY.value]
    return now - last_run >= interval


def get_due_jobs(
    db: Session, domain_id: int, now: datetime | None = None
) -> list[ScheduledJob]:
    """Active jobs of the domain whose run frequency says they should run now."""
    now = now or datetime.now(timezone.utc)
    return [job for job in list_jobs(db, domain_id, active=True) if is_job_due(job, now)]


def mark_job_run(db: Session, job: ScheduledJob, now: datetime | None = None) -> ScheduledJob:
    job.last_run = now or datetime.now(timezone.utc)
    db.commit()
    db.refresh(job)
    return job
