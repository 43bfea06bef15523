"""SQLAlchemy ORM models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, Index, Integer, String, Text, UniqueConstraint, false
from sqlalchemy.orm import Mapped, mapped_column

from civimember.db.base import Base
from civimember.db.enums import RunFrequency


class ScheduledJob(Base):
    """
    Periodic background job known to the scheduler.

    Rows are seeded once at install time (see civimember.jobs.seed) and
    afterwards only toggled or edited by administrators.
    """

    __tablename__ = "scheduled_jobs"
    __table_args__ = (
        UniqueConstraint(
            "domain_id", "api_entity", "api_action", name="uq_scheduled_job_action"
        ),
        Index("idx_scheduled_jobs_domain_active", "domain_id", "is_active"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    domain_id: Mapped[int] = mapped_column(Integer, nullable=False)
    run_frequency: Mapped[str] = mapped_column(
        String(8), default=RunFrequency.DAILY.value, nullable=False
    )  # Always, Hourly, Daily
    last_run: Mapped[datetime | None] = mapped_column(nullable=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    api_entity: Mapped[str] = mapped_column(String(255), nullable=False)
    api_action: Mapped[str] = mapped_column(String(255), nullable=False)
    parameters: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, server_default=false(), nullable=False)
