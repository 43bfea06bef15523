"""Job handler registry."""

from __future__ import annotations

from typing import Awaitable, Callable, Mapping

from civimember.jobs.handlers import reminders

JobHandler = Callable[[object, object], Awaitable[None]]

# Keyed by "<api_entity>.<api_action>" of the scheduled job
JOB_HANDLERS: Mapping[str, JobHandler] = {
    "job.send_reminder": reminders.process_send_reminder,
}


def job_handler_key(api_entity: str, api_action: str) -> str:
    return f"{api_entity}.{api_action}"


def resolve_job_handler(key: str) -> JobHandler:
    handler = JOB_HANDLERS.get(key)
    if not handler:
        raise ValueError(f"Unknown job type: {key}")
    return handler
