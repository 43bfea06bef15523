"""Scheduled reminder job handlers."""

from __future__ import annotations

import logging

from civimember.services import membership_status_service, recipient_builder
from civimember.services.action_mapping import build_mapping_registry

logger = logging.getLogger(__name__)


async def process_send_reminder(db, job) -> None:
    """Resolve due recipients for every active scheduled reminder."""
    logger.info("Processing send_reminder job %s", job.id)
    registry = build_mapping_registry(membership_status_service.make_status_resolver(db))
    results = recipient_builder.find_due_recipients_for_active_schedules(db, registry)
    logger.info(
        "Scheduled reminders complete (schedules=%s due_recipients=%s)",
        len(results),
        sum(len(recipients) for recipients in results.values()),
    )
