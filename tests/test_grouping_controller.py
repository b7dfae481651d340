from __future__ import annotations

from dataclasses import replace

from fastapi import FastAPI
from fastapi.testclient import TestClient

from shuffle_lunch.controllers.grouping_controller import router
from shuffle_lunch.main import create_app
from shuffle_lunch.repository.roster_repository import RosterRepository
from shuffle_lunch.services.grouping_service import LunchShuffleService
from shuffle_lunch.services.notification_service import SlackNotifier
from shuffle_lunch.utils.config import get_settings


def _member_payload(index: int, **overrides) -> dict:
    payload = {
        "id": str(index),
        "slack_id": f"@user{index}",
        "department": f"dept_{index}",
        "every_weekday": True,
    }
    payload.update(overrides)
    return payload


def _build_client(settings=None) -> TestClient:
    settings = settings or get_settings()
    app = FastAPI()
    app.include_router(router)
    app.state.shuffle_service = LunchShuffleService(settings)
    app.state.roster_repository = RosterRepository(settings)
    app.state.notifier = SlackNotifier(settings)
    return TestClient(app)


def test_shuffle_endpoint_returns_groups():
    client = _build_client()
    response = client.post(
        "/shuffle_lunch",
        json={"members": [_member_payload(index) for index in range(10)], "group_size": 5, "seed": 3},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["group_size"] == 5
    assert [len(group["member_ids"]) for group in body["groups"]] == [5, 5]
    placed = sorted(member_id for group in body["groups"] for member_id in group["member_ids"])
    assert placed == sorted(str(index) for index in range(10))
    for group in body["groups"]:
        assert group["available_days"] == ["monday", "tuesday", "wednesday", "thursday", "friday"]
        assert group["same_department_pair_count"] == 0
        assert len(group["slack_ids"]) == 5


def test_shuffle_endpoint_rejects_too_few_members():
    client = _build_client()
    response = client.post(
        "/shuffle_lunch",
        json={"members": [_member_payload(index) for index in range(4)], "group_size": 5},
    )
    assert response.status_code == 422


def test_shuffle_endpoint_reports_infeasible_roster():
    client = _build_client()
    members = [_member_payload(index) for index in range(9)]
    members.append(_member_payload(9, every_weekday=False))
    response = client.post("/shuffle_lunch", json={"members": members, "group_size": 5})

    assert response.status_code == 409
    assert "9" in response.json()["detail"]


def test_shuffle_endpoint_validates_payload():
    client = _build_client()
    members = [_member_payload(index) for index in range(10)]
    members[0]["department"] = "   "
    response = client.post("/shuffle_lunch", json={"members": members, "group_size": 5})
    assert response.status_code == 422


def test_shuffle_endpoint_rejects_separator_only_department():
    client = _build_client()
    members = [_member_payload(index) for index in range(10)]
    members[0]["department"] = "|,"
    response = client.post("/shuffle_lunch", json={"members": members, "group_size": 5})
    assert response.status_code == 400


def test_roster_endpoint_uses_configured_csv(write_roster, everyday_rows):
    path = write_roster(everyday_rows)
    client = _build_client(replace(get_settings(), roster_csv_path=path, slack_webhook_url=None))

    response = client.post("/shuffle_lunch/roster", json={"group_size": 5, "seed": 1, "notify": True})

    assert response.status_code == 200
    body = response.json()
    assert body["notified"] is False
    assert [len(group["member_ids"]) for group in body["groups"]] == [5, 5]


def test_roster_endpoint_posts_report_when_asked(write_roster, everyday_rows, monkeypatch):
    posted = []
    monkeypatch.setattr(
        SlackNotifier,
        "post_report",
        lambda self, text: posted.append(text) or True,
    )
    path = write_roster(everyday_rows)
    client = _build_client(
        replace(get_settings(), roster_csv_path=path, slack_webhook_url="https://hooks.example.test/x")
    )

    response = client.post("/shuffle_lunch/roster", json={"group_size": 5, "notify": True})

    assert response.status_code == 200
    assert response.json()["notified"] is True
    assert len(posted) == 1
    assert "====== Shuffle lunch group 1 ======" in posted[0]


def test_roster_endpoint_missing_csv_is_bad_request(tmp_path):
    client = _build_client(replace(get_settings(), roster_csv_path=tmp_path / "absent.csv"))
    response = client.post("/shuffle_lunch/roster", json={})
    assert response.status_code == 400


def test_create_app_wires_services_and_health():
    client = TestClient(create_app())
    assert client.app.state.shuffle_service is not None
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_shuffle_endpoint_reports_roster_without_enough_seats():
    client = _build_client()
    response = client.post(
        "/shuffle_lunch",
        json={"members": [_member_payload(index) for index in range(9)], "group_size": 5},
    )

    assert response.status_code == 422
    assert "rejected the member" in response.json()["detail"]


def test_roster_endpoint_reports_roster_without_enough_seats(write_roster, everyday_rows):
    path = write_roster(everyday_rows[:9])
    client = _build_client(replace(get_settings(), roster_csv_path=path))

    response = client.post("/shuffle_lunch/roster", json={"group_size": 5})

    assert response.status_code == 422
    assert "rejected the member" in response.json()["detail"]
