"""Resolve the recipients of a scheduled reminder.

Asks the schedule's action mapping for a recipient query, runs it and works
out when each recipient's reminder falls due.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from dateutil.relativedelta import relativedelta
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from civimember.db.enums import RecipientPhase, StartActionCondition, StartActionUnit
from civimember.db.models import ActionSchedule
from civimember.services import action_schedule_service
from civimember.services.action_mapping import (
    ActionMapping,
    ActionMappingNotFoundError,
    MappingRegistry,
)
from civimember.utils.padded import explode_padded

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Recipient:
    """A contact who should receive a scheduled reminder."""

    contact_id: int
    entity_id: int | None
    trigger_date: date | datetime | None
    reminder_date: datetime | None
    is_due: bool
    phase: RecipientPhase


def _as_datetime(value: date | datetime | None) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)


def build_default_params(
    schedule: ActionSchedule, mapping: ActionMapping, now: datetime
) -> dict[str, Any]:
    return {
        "casActionScheduleId": schedule.id,
        "casMappingId": mapping.id,
        "casMappingEntity": mapping.entity,
        "casNow": now,
    }


def compute_reminder_date(
    schedule: ActionSchedule, trigger_date: date | datetime | None
) -> datetime | None:
    """
    When the reminder for a given trigger date is due.

    An absolute date on the schedule wins. Otherwise the trigger date is
    shifted by start_action_offset units, before or after.
    """
    if schedule.absolute_date is not None:
        return _as_datetime(schedule.absolute_date)
    start = _as_datetime(trigger_date)
    if start is None:
        return None

    try:
        unit = StartActionUnit(schedule.start_action_unit or StartActionUnit.DAY.value)
    except ValueError:
        logger.warning(
            "Unknown start_action_unit '%s' on schedule %s; using days",
            schedule.start_action_unit,
            schedule.id,
        )
        unit = StartActionUnit.DAY
    delta = relativedelta(**{f"{unit.value}s": schedule.start_action_offset or 0})

    if schedule.start_action_condition == StartActionCondition.BEFORE.value:
        return start - delta
    return start + delta


def find_recipients(
    db: Session,
    schedule: ActionSchedule,
    registry: MappingRegistry,
    now: datetime | None = None,
) -> list[Recipient]:
    """
    All recipients of a schedule, due or not.

    Raises ActionMappingNotFoundError when the schedule's mapping isn't
    registered.
    """
    now = _as_datetime(now) or datetime.now(timezone.utc)
    mapping = registry.get(schedule.mapping_id)

    query = mapping.create_query(
        schedule, RecipientPhase.RELATION_FIRST, build_default_params(schedule, mapping, now)
    )
    # Permission joins can repeat a membership once per qualifying relationship
    stmt = (
        query.to_select(
            query.contact_id_field.label("contact_id"),
            query.entity_id_field.label("entity_id"),
            query.date_field.label("trigger_date"),
        )
        .distinct()
        .order_by(query.entity_id_field)
    )

    recipients = []
    for row in db.execute(stmt).all():
        reminder_date = compute_reminder_date(schedule, row.trigger_date)
        recipients.append(
            Recipient(
                contact_id=row.contact_id,
                entity_id=row.entity_id,
                trigger_date=row.trigger_date,
                reminder_date=reminder_date,
                is_due=reminder_date is not None and reminder_date <= now,
                phase=RecipientPhase.RELATION_FIRST,
            )
        )

    # Additional contacts only hear about a schedule that matched something
    manual_ids = explode_padded(schedule.recipient_manual) or []
    if recipients and manual_ids and mapping.send_to_additional(schedule.entity_value):
        reminder_dates = [r.reminder_date for r in recipients if r.reminder_date is not None]
        reminder_date = min(reminder_dates) if reminder_dates else None
        seen = {r.contact_id for r in recipients}
        for contact_id in manual_ids:
            if not str(contact_id).strip().isdigit():
                continue
            contact_id = int(contact_id)
            if contact_id in seen:
                continue
            seen.add(contact_id)
            recipients.append(
                Recipient(
                    contact_id=contact_id,
                    entity_id=None,
                    trigger_date=None,
                    reminder_date=reminder_date,
                    is_due=reminder_date is not None and reminder_date <= now,
                    phase=RecipientPhase.ADDITION_FIRST,
                )
            )

    logger.info(
        "Schedule %s matched %s recipients (%s due)",
        schedule.id,
        len(recipients),
        sum(1 for r in recipients if r.is_due),
    )
    return recipients


def find_due_recipients(
    db: Session,
    schedule: ActionSchedule,
    registry: MappingRegistry,
    now: datetime | None = None,
) -> list[Recipient]:
    return [r for r in find_recipients(db, schedule, registry, now) if r.is_due]


def find_due_recipients_for_active_schedules(
    db: Session,
    registry: MappingRegistry,
    now: datetime | None = None,
) -> dict[int, list[Recipient]]:
    """
    Due recipients of every active schedule, keyed by schedule id.

    Schedules pointing at an unregistered mapping are skipped with a warning.
    A schedule whose query fails (e.g. a legacy date field with no column) is
    rolled back, logged and skipped; the remaining schedules still run.
    """
    results: dict[int, list[Recipient]] = {}
    for schedule in action_schedule_service.list_active_schedules(db):
        schedule_id, mapping_id = schedule.id, schedule.mapping_id
        try:
            results[schedule_id] = find_due_recipients(db, schedule, registry, now)
        except ActionMappingNotFoundError:
            logger.warning(
                "Schedule %s uses unregistered action mapping %s; skipping",
                schedule_id,
                mapping_id,
            )
        except SQLAlchemyError:
            db.rollback()
            logger.exception("Recipient query failed for schedule %s; skipping", schedule_id)
    return results
