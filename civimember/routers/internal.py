"""
Internal endpoints for scheduled/cron operations.

Protected by X-Internal-Secret header.
Call from an external cron when the worker process isn't running.
"""
from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from civimember import worker
from civimember.core.config import settings
from civimember.core.deps import get_db
from civimember.schemas.scheduled_job import RunJobsResponse


router = APIRouter(prefix="/internal/scheduled", tags=["internal"])


def verify_internal_secret(x_internal_secret: str = Header(...)):
    """Verify the internal secret header."""
    if not settings.INTERNAL_SECRET:
        raise HTTPException(status_code=501, detail="INTERNAL_SECRET not configured")
    if x_internal_secret != settings.INTERNAL_SECRET:
        raise HTTPException(status_code=403, detail="Invalid internal secret")


@router.post("/run-jobs", response_model=RunJobsResponse)
async def run_jobs(
    db: Session = Depends(get_db),
    _: None = Depends(verify_internal_secret),
):
    """Run every due scheduled job once."""
    stats = await worker.run_due_jobs(db)
    return RunJobsResponse(**stats)
