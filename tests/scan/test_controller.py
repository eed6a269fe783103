from __future__ import annotations

from datetime import datetime

import pytest

from rfid_attendance.container import assemble
from rfid_attendance.mailbox.memory_mailbox import InMemoryDeviceMailbox
from rfid_attendance.main import create_app

from tests.fakes import (
    ALPHA,
    BrokenAttendance,
    InMemoryAttendance,
    InMemoryPersons,
    InMemoryTenants,
    InMemoryTimeSettings,
    MalformedTimeSettings,
    build_world,
)


@pytest.fixture(autouse=True)
def testing_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")


def _client(container):
    return create_app(container=container).test_client()


@pytest.fixture
def client(ama, kofi, fixed_now):
    return _client(build_world(persons=[ama, kofi], clock=lambda: fixed_now))


def test_scan_returns_result(client, ama):
    resp = client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1", "api_key": ALPHA.api_key})

    assert resp.status_code == 200
    data = resp.get_json()
    assert data["sign"] == 1
    assert data["name"] == ama.name
    assert data["exists"] is True


def test_api_key_from_header(client, ama):
    resp = client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"}, headers={"X-API-Key": ALPHA.api_key})

    assert resp.get_json()["sign"] == 1


def test_unknown_tag_is_not_an_http_error(client):
    resp = client.post("/scan", json={"uid": "X1", "device_uid": "gate-1"})

    assert resp.status_code == 200
    assert resp.get_json()["sign"] == 2


@pytest.mark.parametrize(
    "body",
    [{}, {"uid": "A1B2C3D4"}, {"device_uid": "gate-1"}, ["A1B2C3D4", "gate-1"], "A1B2C3D4", 42],
)
def test_missing_fields(client, body):
    resp = client.post("/scan", json=body)

    assert resp.status_code == 400
    assert resp.get_json()["sign"] == 0
    assert resp.get_json()["message"] == "uid and device_uid are required."


def test_accept_language_selects_french(client):
    resp = client.post("/scan", json={}, headers={"Accept-Language": "fr-FR,fr;q=0.9"})

    assert resp.get_json()["message"] == "uid et device_uid sont requis."


def test_queue_drains_after_one_read(client, ama):
    client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"})

    first = client.get("/scan/queue?device_uid=gate-1")
    second = client.get("/scan/queue?device_uid=gate-1")

    assert first.status_code == 200
    assert [r["uid"] for r in first.get_json()] == [ama.uid]
    assert second.get_json() == []


def test_queue_requires_device(client):
    resp = client.get("/scan/queue")

    assert resp.status_code == 400
    assert "device_uid" in resp.get_json()["error"]


def test_missing_time_settings_is_a_client_error(ama, fixed_now):
    client = _client(build_world(persons=[ama], settings={}, clock=lambda: fixed_now))

    resp = client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"})

    assert resp.status_code == 400
    assert resp.get_json()["flag"] == "No Schedule"


def test_malformed_time_settings_is_reported_as_configuration(ama, fixed_now):
    client = _client(build_world(persons=[ama], time_settings_repo=MalformedTimeSettings(), clock=lambda: fixed_now))

    resp = client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"})

    assert resp.status_code == 400
    data = resp.get_json()
    assert data["flag"] == "No Schedule"
    assert data["message"] == "Time settings for this school are invalid."
    assert client.get("/scan/queue?device_uid=gate-1").get_json()[0]["flag"] == "No Schedule"


def test_store_failure_is_a_server_error(ama, fixed_now):
    client = _client(build_world(persons=[ama], attendance=BrokenAttendance(), clock=lambda: fixed_now))

    resp = client.post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"})

    assert resp.status_code == 500
    data = resp.get_json()
    assert data["sign"] == 0
    assert data["flag"] == "Error"
    assert client.get("/scan/queue?device_uid=gate-1").get_json()[0]["flag"] == "Error"


def test_unexpected_error_is_a_server_error(ama, fixed_now):
    world = build_world(persons=[ama], clock=lambda: fixed_now)

    def boom(**kwargs):
        raise RuntimeError("unexpected")

    world.scan_service.handle_scan = boom
    resp = _client(world).post("/scan", json={"uid": ama.uid, "device_uid": "gate-1"})

    assert resp.status_code == 500
    assert "error" not in resp.get_json()


def test_health_ok(client):
    resp = client.get("/scan/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "OK"


def test_health_timestamp_uses_local_clock(client, monkeypatch):
    monkeypatch.setattr("rfid_attendance.scan.controller.now_local", lambda: datetime(2026, 3, 2, 7, 30, 15, 123))

    assert client.get("/scan/health").get_json()["timestamp"] == "2026-03-02T07:30:15"


def test_health_reports_database_down(ama):
    container = assemble(
        persons_repo=InMemoryPersons([ama]),
        tenants_repo=InMemoryTenants({}),
        time_settings_repo=InMemoryTimeSettings({}),
        attendance_repo=InMemoryAttendance(),
        mailbox=InMemoryDeviceMailbox(),
        health_probe=lambda: False,
    )

    resp = _client(container).get("/scan/health")

    assert resp.status_code == 500
    assert resp.get_json()["database"] == "disconnected"
