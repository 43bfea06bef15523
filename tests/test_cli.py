from datetime import date

import pytest
from click.testing import CliRunner

from civimember import cli as cli_module
from civimember.services import scheduled_job_service


@pytest.fixture
def runner(db, monkeypatch):
    monkeypatch.setattr(cli_module, "SessionLocal", lambda: db)
    return CliRunner()


def test_install_jobs(runner, db):
    result = runner.invoke(cli_module.cli, ["install-jobs", "--domain-id", "3"])

    assert result.exit_code == 0
    assert "Installed 17 scheduled jobs for domain 3" in result.output
    assert "job.send_reminder (Hourly, inactive)" in result.output
    assert len(scheduled_job_service.list_jobs(db, 3)) == 17

    result = runner.invoke(cli_module.cli, ["install-jobs", "--domain-id", "3"])
    assert "Installed 0 scheduled jobs" in result.output


def test_list_mappings(runner):
    result = runner.invoke(cli_module.cli, ["list-mappings"])

    assert result.exit_code == 0
    assert "4: Membership (memberships)" in result.output
    assert "end_date: Membership Expiration Date" in result.output


def test_preview_recipients_not_found(runner, statuses):
    result = runner.invoke(cli_module.cli, ["preview-recipients", "--schedule-id", "42"])

    assert result.exit_code == 0
    assert "Scheduled reminder not found: 42" in result.output


def test_preview_recipients(runner, db, make_membership, make_schedule, membership_types):
    membership = make_membership(end_date=date(2020, 1, 1))
    schedule = make_schedule(entity_value=[membership_types["General"].id])
    expected = f"contact {membership.contact_id} entity {membership.id}"
    schedule_id = schedule.id
    db.commit()

    result = runner.invoke(
        cli_module.cli, ["preview-recipients", "--schedule-id", str(schedule_id), "--due-only"]
    )

    assert result.exit_code == 0
    assert "1 recipients" in result.output
    assert expected in result.output


def test_serve_runs_uvicorn(monkeypatch):
    import uvicorn

    calls = {}

    def fake_run(app, host, port):
        calls.update(app=app, host=host, port=port)

    monkeypatch.setattr(uvicorn, "run", fake_run)
    monkeypatch.delenv("HOST", raising=False)

    result = CliRunner().invoke(cli_module.cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    assert calls == {"app": "civimember.main:app", "host": "127.0.0.1", "port": 9000}
