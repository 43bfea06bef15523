"""Scheduled jobs router - view the job registry."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from civimember.core.config import settings
from civimember.core.deps import get_db
from civimember.schemas.scheduled_job import ScheduledJobRead
from civimember.services import scheduled_job_service

router = APIRouter(tags=["scheduled-jobs"])


@router.get("", response_model=list[ScheduledJobRead])
def list_scheduled_jobs(
    active: bool | None = None,
    domain_id: int | None = None,
    db: Session = Depends(get_db),
):
    """List scheduled jobs for a domain (defaults to the configured domain)."""
    return scheduled_job_service.list_jobs(
        db,
        domain_id=settings.DEFAULT_DOMAIN_ID if domain_id is None else domain_id,
        active=active,
    )
