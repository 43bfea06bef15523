"""Pydantic schemas for scheduled jobs."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ScheduledJobRead(BaseModel):
    """Scheduled job response schema."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    domain_id: int
    name: str
    description: str | None
    run_frequency: str
    api_entity: str
    api_action: str
    parameters: str | None
    is_active: bool
    last_run: datetime | None


class RunJobsResponse(BaseModel):
    jobs_run: int
    jobs_failed: int
    jobs_skipped: int
