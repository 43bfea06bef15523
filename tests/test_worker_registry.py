from datetime import date, datetime, timezone

import pytest

from civimember.services import scheduled_job_service

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def test_job_registry_resolves_send_reminder_handler():
    from civimember.jobs.registry import resolve_job_handler

    handler = resolve_job_handler("job.send_reminder")
    assert callable(handler)


def test_job_registry_unknown_raises():
    from civimember.jobs.registry import resolve_job_handler

    with pytest.raises(ValueError):
        resolve_job_handler("job.nope")


@pytest.mark.asyncio
async def test_process_job_uses_registry(monkeypatch):
    from civimember import worker

    calls: dict[str, str] = {}

    async def stub_handler(_db, job):
        calls["job_id"] = job.id

    def stub_resolver(key: str):
        calls["resolved"] = key
        return stub_handler

    monkeypatch.setattr(worker, "resolve_job_handler", stub_resolver)

    job = type("Job", (), {"id": 7, "api_entity": "job", "api_action": "send_reminder"})()

    await worker.process_job(None, job)

    assert calls["resolved"] == "job.send_reminder"
    assert calls["job_id"] == 7


def _activate(db, api_action: str):
    job = next(
        j for j in scheduled_job_service.list_jobs(db, 1) if j.api_action == api_action
    )
    return scheduled_job_service.set_job_active(db, job.id, True)


@pytest.mark.asyncio
async def test_run_due_jobs_runs_handlers_and_skips_unknown(db, statuses):
    from civimember import worker

    scheduled_job_service.install_default_jobs(db, domain_id=1)
    reminder_job = _activate(db, "send_reminder")

    stats = await worker.run_due_jobs(db, domain_id=1, now=NOW)

    # version_check is active but has no handler
    assert stats == {"jobs_run": 1, "jobs_failed": 0, "jobs_skipped": 1}
    assert scheduled_job_service.get_job(db, reminder_job.id).last_run is not None

    # Hourly job already ran this hour
    stats = await worker.run_due_jobs(db, domain_id=1, now=NOW)
    assert stats == {"jobs_run": 0, "jobs_failed": 0, "jobs_skipped": 1}


@pytest.mark.asyncio
async def test_run_due_jobs_counts_failures(db, monkeypatch):
    from civimember import worker

    scheduled_job_service.install_default_jobs(db, domain_id=1)
    reminder_job = _activate(db, "send_reminder")

    async def failing_handler(_db, _job):
        raise RuntimeError("boom")

    monkeypatch.setattr(worker, "resolve_job_handler", lambda key: failing_handler)

    stats = await worker.run_due_jobs(db, domain_id=1, now=NOW)

    assert stats == {"jobs_run": 0, "jobs_failed": 2, "jobs_skipped": 0}
    assert scheduled_job_service.get_job(db, reminder_job.id).last_run is None


@pytest.mark.asyncio
async def test_send_reminder_handler_resolves_due_recipients(
    db, make_membership, make_schedule, membership_types, caplog
):
    from civimember.jobs.handlers.reminders import process_send_reminder

    make_membership(end_date=date(2020, 1, 1))
    make_schedule(entity_value=[membership_types["General"].id])
    job = type("Job", (), {"id": 1})()

    with caplog.at_level("INFO", logger="civimember.jobs.handlers.reminders"):
        await process_send_reminder(db, job)

    assert "schedules=1 due_recipients=1" in caplog.text
