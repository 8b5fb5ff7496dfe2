import pytest

from config import testing as settings
from src.geo_attendance.geo_attendance.container import build_services
from src.geo_attendance.geo_attendance.main import create_app


@pytest.fixture
def client(monkeypatch, offices_repo, employees_repo, scheduler):
    monkeypatch.setenv("APP_ENV", "testing")
    container = build_services(settings, offices_repo=offices_repo, employees_repo=employees_repo, scheduler=scheduler)
    return create_app(container=container).test_client()


def _login_as(client, role):
    with client.session_transaction() as s:
        s["employee_id"] = 99
        s["role"] = role


def test_offices_are_public(client):
    offices = client.get("/offices").get_json()["offices"]

    assert [o["branchName"] for o in offices] == ["Main Office", "Branch Office"]
    assert client.get("/offices/Globex").status_code == 404


def test_creating_an_office_needs_admin(client):
    payload = {"branchName": "SRM Office", "companyName": "Acme", "coordinates": {"lat": 28.796565, "lng": 77.538373}}

    assert client.post("/offices", json=payload).status_code == 401
    _login_as(client, "employee")
    assert client.post("/offices", json=payload).status_code == 403

    _login_as(client, "admin")
    resp = client.post("/offices", json={**payload, "radius": 1000})
    assert resp.status_code == 201
    assert resp.get_json()["office"]["radius"] == 1000.0
    assert client.post("/offices", json=payload).status_code == 409


def test_delete_unknown_office(client):
    _login_as(client, "admin")

    assert client.delete("/offices/42").status_code == 404
    assert client.delete("/offices/2").status_code == 200


def test_wrong_password_is_unauthorized(client):
    resp = client.post("/login", json={"email": "nobody@acme.test", "password": "whatever"})

    assert resp.status_code == 401
    assert resp.get_json()["message"] == "Invalid credentials"
