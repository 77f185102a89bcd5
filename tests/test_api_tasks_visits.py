"""Tareas y visitas"""

from datetime import date, datetime, timedelta, timezone

import pytest

API = "/api/v1"


@pytest.fixture()
def zone(api, auth_headers, zone_payload, plants):
    response = api.post(f"{API}/zones", json=zone_payload, headers=auth_headers)
    return response.json()["zone"]


def _task(api, headers, client_id, **overrides):
    payload = {
        "client_id": str(client_id),
        "title": "Prune roses",
        "due_date": "2026-06-01T09:00:00",
        "priority": "high",
    }
    payload.update(overrides)
    return api.post(f"{API}/tasks", json=payload, headers=headers)


# ============================================================================
# TASKS
# ============================================================================

def test_create_task_with_zone(api, auth_headers, client_record, zone):
    response = _task(api, auth_headers, client_record.id, zone_id=zone["id"])

    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "pending"
    assert data["zone"]["name"] == "Front border"
    assert data["client"]["id"] == str(client_record.id)
    assert data["completed_at"] is None


def test_task_zone_must_belong_to_client(api, auth_headers, db, owner, client_record, zone):
    from garden_crm.models import Client

    other = Client(owner_id=owner.id, name="Bob", address="3 Pine Ave")
    db.add(other)
    db.commit()

    response = _task(api, auth_headers, other.id, zone_id=zone["id"])

    assert response.status_code == 422
    assert response.json()["errors"] == {"zone_id": "Zone does not belong to the selected client"}


def test_complete_and_reopen_task(api, auth_headers, client_record):
    task = _task(api, auth_headers, client_record.id).json()

    completed = api.post(f"{API}/tasks/{task['id']}/complete", headers=auth_headers).json()
    assert completed["status"] == "completed"
    assert completed["completed_at"] is not None

    reopened = api.patch(f"{API}/tasks/{task['id']}", json={"status": "pending"}, headers=auth_headers).json()
    assert reopened["completed_at"] is None


def test_list_tasks_filters_and_orders(api, auth_headers, client_record):
    _task(api, auth_headers, client_record.id, title="Later", due_date="2026-07-01T09:00:00")
    first = _task(api, auth_headers, client_record.id, title="Sooner", due_date="2026-05-01T09:00:00").json()
    api.post(f"{API}/tasks/{first['id']}/complete", headers=auth_headers)

    all_tasks = api.get(f"{API}/tasks", headers=auth_headers).json()
    assert [t["title"] for t in all_tasks] == ["Sooner", "Later"]

    pending = api.get(f"{API}/tasks", params={"status": "pending"}, headers=auth_headers).json()
    assert [t["title"] for t in pending] == ["Later"]


def test_delete_task(api, auth_headers, client_record):
    task = _task(api, auth_headers, client_record.id).json()

    assert api.delete(f"{API}/tasks/{task['id']}", headers=auth_headers).status_code == 200
    assert api.get(f"{API}/tasks/{task['id']}", headers=auth_headers).status_code == 404


def test_deleting_zone_keeps_task(api, auth_headers, client_record, zone):
    task = _task(api, auth_headers, client_record.id, zone_id=zone["id"]).json()

    api.delete(f"{API}/zones/{zone['id']}", headers=auth_headers)

    reloaded = api.get(f"{API}/tasks/{task['id']}", headers=auth_headers).json()
    assert reloaded["zone_id"] is None


# ============================================================================
# VISITS
# ============================================================================

def test_create_visit_with_zones(api, auth_headers, client_record, zone):
    response = api.post(
        f"{API}/visits",
        json={
            "client_id": str(client_record.id),
            "scheduled_date": "2026-06-02T00:00:00",
            "scheduled_time": "10:30",
            "zones": [zone["id"], zone["id"]],
        },
        headers=auth_headers,
    )

    assert response.status_code == 201
    data = response.json()
    assert data["zones"] == [zone["id"]]
    assert data["status"] == "scheduled"


def test_visit_rejects_foreign_zone(api, auth_headers, client_record):
    response = api.post(
        f"{API}/visits",
        json={
            "client_id": str(client_record.id),
            "scheduled_date": "2026-06-02T00:00:00",
            "zones": ["00000000-0000-0000-0000-000000000001"],
        },
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert "zones" in response.json()["errors"]


def test_invalid_visit_time_is_field_error(api, auth_headers, client_record):
    response = api.post(
        f"{API}/visits",
        json={"client_id": str(client_record.id), "scheduled_date": "2026-06-02T00:00:00", "scheduled_time": "25:00"},
        headers=auth_headers,
    )

    assert response.status_code == 422
    assert list(response.json()["errors"]) == ["scheduled_time"]


def test_visits_for_day_and_range(api, auth_headers, client_record):
    for day in ("2026-06-01T08:00:00", "2026-06-02T23:59:00", "2026-06-03T00:00:00"):
        api.post(
            f"{API}/visits",
            json={"client_id": str(client_record.id), "scheduled_date": day},
            headers=auth_headers,
        )

    today = api.get(f"{API}/visits/today", params={"day": "2026-06-02"}, headers=auth_headers).json()
    assert [v["scheduled_date"][:10] for v in today] == ["2026-06-02"]

    ranged = api.get(
        f"{API}/visits",
        params={"start": "2026-06-01T00:00:00", "end": "2026-06-03T00:00:00"},
        headers=auth_headers,
    ).json()
    assert len(ranged) == 2


def test_complete_visit_updates_last_visit(api, auth_headers, client_record):
    visit = api.post(
        f"{API}/visits",
        json={"client_id": str(client_record.id), "scheduled_date": "2026-06-02T09:00:00"},
        headers=auth_headers,
    ).json()

    completed = api.post(f"{API}/visits/{visit['id']}/complete", headers=auth_headers).json()
    assert completed["status"] == "completed"
    assert completed["completed_at"] is not None

    client = api.get(f"{API}/clients/{client_record.id}", headers=auth_headers).json()
    assert client["last_visit"].startswith("2026-06-02")


# ============================================================================
# DASHBOARD
# ============================================================================

def test_dashboard_summary(api, auth_headers, client_record, zone):
    today = date(2026, 6, 2)
    api.put(f"{API}/zones/{zone['id']}/plants", json={"plant_ids": [1, 2, 3]}, headers=auth_headers)
    _task(api, auth_headers, client_record.id, due_date="2026-06-01T09:00:00")
    _task(api, auth_headers, client_record.id, due_date="2026-06-10T09:00:00", status="in_progress")
    _task(api, auth_headers, client_record.id, due_date="2026-05-01T09:00:00", status="completed")
    api.post(
        f"{API}/visits",
        json={"client_id": str(client_record.id), "scheduled_date": f"{today.isoformat()}T11:00:00"},
        headers=auth_headers,
    )

    summary = api.get(
        f"{API}/dashboard/summary", params={"today": today.isoformat()}, headers=auth_headers
    ).json()

    assert summary == {
        "total_clients": 1,
        "active_clients": 1,
        "total_zones": 1,
        "total_plants": 3,
        "pending_tasks": 2,
        "overdue_tasks": 1,
        "visits_today": 1,
    }


def test_visits_for_day_defaults_to_today(db, owner, client_record):
    from garden_crm.models import Visit
    from garden_crm.services.visits import visits_for_day

    now = datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)
    db.add(Visit(owner_id=owner.id, client_id=client_record.id, scheduled_date=now, zones=[]))
    db.add(Visit(owner_id=owner.id, client_id=client_record.id, scheduled_date=now + timedelta(days=2), zones=[]))
    db.commit()

    assert len(visits_for_day(db, owner.id)) == 1
