"""Scheduled reminder lookups."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from civimember.db.models import ActionSchedule


class ActionScheduleNotFoundError(Exception):
    """Scheduled reminder not found."""

    pass


def get_schedule(db: Session, schedule_id: int) -> ActionSchedule:
    schedule = db.get(ActionSchedule, schedule_id)
    if schedule is None:
        raise ActionScheduleNotFoundError(f"Scheduled reminder {schedule_id} not found")
    return schedule


def list_active_schedules(db: Session, mapping_id: int | None = None) -> list[ActionSchedule]:
    """Active schedules, optionally limited to one mapping, in id order."""
    stmt = select(ActionSchedule).where(ActionSchedule.is_active.is_(True))
    if mapping_id is not None:
        stmt = stmt.where(ActionSchedule.mapping_id == mapping_id)
    return list(db.execute(stmt.order_by(ActionSchedule.id)).scalars().all())
