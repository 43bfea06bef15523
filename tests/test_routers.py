from datetime import date

import pytest

from civimember.core.config import settings
from civimember.services import scheduled_job_service


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


@pytest.mark.asyncio
async def test_list_action_mappings(client, statuses):
    response = await client.get("/action-mappings")

    assert response.status_code == 200
    data = response.json()
    assert [m["id"] for m in data] == [4]
    assert data[0]["entity_label"] == "Membership"
    assert data[0]["date_fields"]["join_date"] == "Member Since"


@pytest.mark.asyncio
async def test_preview_recipients_not_found(client, statuses):
    response = await client.get("/action-schedules/999/recipients")

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_preview_recipients_unknown_mapping(client, make_schedule):
    schedule = make_schedule(entity_value=[1], mapping_id=999)

    response = await client.get(f"/action-schedules/{schedule.id}/recipients")

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_preview_recipients(client, make_membership, make_schedule, membership_types):
    overdue = make_membership(end_date=date(2020, 1, 1))
    make_membership(end_date=date(2099, 1, 1))
    schedule = make_schedule(entity_value=[membership_types["General"].id])

    response = await client.get(f"/action-schedules/{schedule.id}/recipients")

    assert response.status_code == 200
    data = response.json()
    assert data["schedule_id"] == schedule.id
    assert data["mapping_id"] == 4
    assert data["reset_on_trigger_date_change"] is True
    assert len(data["recipients"]) == 2
    assert data["recipients"][0]["phase"] == "rel1"

    response = await client.get(
        f"/action-schedules/{schedule.id}/recipients", params={"due_only": "true"}
    )
    assert [r["entity_id"] for r in response.json()["recipients"]] == [overdue.id]


@pytest.mark.asyncio
async def test_list_scheduled_jobs(client, db):
    scheduled_job_service.install_default_jobs(db, domain_id=settings.DEFAULT_DOMAIN_ID)

    response = await client.get("/scheduled-jobs")
    assert response.status_code == 200
    assert len(response.json()) == 17

    response = await client.get("/scheduled-jobs", params={"active": "true"})
    assert [job["api_action"] for job in response.json()] == ["version_check"]

    response = await client.get("/scheduled-jobs", params={"domain_id": 42})
    assert response.json() == []


@pytest.mark.asyncio
async def test_run_jobs_requires_secret(client):
    response = await client.post(
        "/internal/scheduled/run-jobs", headers={"X-Internal-Secret": "wrong"}
    )
    assert response.status_code == 403

    response = await client.post("/internal/scheduled/run-jobs")
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_run_jobs_not_configured(client, monkeypatch):
    monkeypatch.setattr(settings, "INTERNAL_SECRET", "")

    response = await client.post(
        "/internal/scheduled/run-jobs", headers={"X-Internal-Secret": "anything"}
    )
    assert response.status_code == 501


@pytest.mark.asyncio
async def test_run_jobs(client, db, statuses):
    scheduled_job_service.install_default_jobs(db, domain_id=settings.DEFAULT_DOMAIN_ID)

    response = await client.post(
        "/internal/scheduled/run-jobs",
        headers={"X-Internal-Secret": settings.INTERNAL_SECRET},
    )

    assert response.status_code == 200
    assert response.json() == {"jobs_run": 0, "jobs_failed": 0, "jobs_skipped": 1}
