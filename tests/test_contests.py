import uuid
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient

from app.main import app
from app.models.company import Company
from app.models.contest import Contest
from app.models.contest_role import ContestRole, ContestUserRole
from app.services.contests import slugify
from conftest import ADMIN, auth_headers


def _payload(company_id, **overrides) -> dict:
    now = datetime.now(timezone.utc)
    payload = {
        "company_id": str(company_id),
        "name": "Exposición Nacional Brahman",
        "type": "LIVESTOCK",
        "registration_start": (now + timedelta(days=1)).isoformat(),
        "registration_end": (now + timedelta(days=10)).isoformat(),
        "contest_start": (now + timedelta(days=10)).isoformat(),
        "contest_end": (now + timedelta(days=12)).isoformat(),
        "max_participants": 40,
    }
    payload.update(overrides)
    return payload


def _company(db) -> Company:
    company = Company(nombre="Asociación Brahman", slug="asociacion-brahman")
    db.add(company)
    db.commit()
    return company


def test_slugify():
    assert slugify("Exposición Nacional Brahman 2025") == "exposicion-nacional-brahman-2025"
    assert slugify("  ¡Café!  ") == "cafe"
    assert slugify("¡¡!!") == "concurso"


def test_create_contest_makes_creator_administrator(client, db):
    company = _company(db)
    response = client.post(
        "/api/v1/contests", json=_payload(company.id), headers=auth_headers("organizer")
    )
    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "exposicion-nacional-brahman"
    assert body["status"] == "DRAFT"
    assert body["company"]["slug"] == "asociacion-brahman"

    role = (
        db.query(ContestUserRole)
        .filter(ContestUserRole.user_id == "organizer")
        .one()
    )
    assert role.role == ContestRole.CONTEST_ADMINISTRATOR.value
    assert str(role.contest_id) == body["id"]


def test_create_contest_duplicate_name(client, db):
    company = _company(db)
    client.post("/api/v1/contests", json=_payload(company.id), headers=auth_headers("organizer"))
    response = client.post(
        "/api/v1/contests", json=_payload(company.id), headers=auth_headers("organizer")
    )
    assert response.status_code == 409
    assert db.query(Contest).count() == 1


def test_create_contest_invalid_dates(client, db):
    company = _company(db)
    now = datetime.now(timezone.utc)
    response = client.post(
        "/api/v1/contests",
        json=_payload(company.id, contest_start=(now + timedelta(days=5)).isoformat()),
        headers=auth_headers("organizer"),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid date sequence"
    assert db.query(ContestUserRole).count() == 0


def test_create_contest_unknown_company(client):
    response = client.post(
        "/api/v1/contests", json=_payload(uuid.uuid4()), headers=auth_headers("organizer")
    )
    assert response.status_code == 404


def test_create_contest_requires_authentication(client, db):
    company = _company(db)
    assert client.post("/api/v1/contests", json=_payload(company.id)).status_code == 401


def test_list_contests_filters(client, make_contest):
    make_contest(name="Feria de Otoño", is_featured=True)
    make_contest(name="Feria de Café", type="COFFEE_PRODUCTS", status="DRAFT")

    everything = client.get("/api/v1/contests").json()
    assert everything["total"] == 2
    assert everything["items"][0]["name"] == "Feria de Otoño"

    coffee = client.get("/api/v1/contests", params={"type": "COFFEE_PRODUCTS"}).json()
    assert [c["name"] for c in coffee["items"]] == ["Feria de Café"]

    open_ = client.get("/api/v1/contests", params={"status": "REGISTRATION_OPEN"}).json()
    assert [c["name"] for c in open_["items"]] == ["Feria de Otoño"]

    found = client.get("/api/v1/contests", params={"search": "café"}).json()
    assert [c["name"] for c in found["items"]] == ["Feria de Café"]


def test_update_rejects_bad_schedule(client, make_contest):
    contest = make_contest()
    past = (datetime.now(timezone.utc) - timedelta(days=30)).isoformat()
    response = client.put(
        f"/api/v1/contests/{contest.id}",
        json={"registration_end": past},
        headers=auth_headers(ADMIN),
    )
    assert response.status_code == 400


def test_update_status(client, make_contest):
    contest = make_contest(status="DRAFT")
    response = client.put(
        f"/api/v1/contests/{contest.id}",
        json={"status": "REGISTRATION_OPEN"},
        headers=auth_headers(ADMIN),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "REGISTRATION_OPEN"


def test_delete_contest(client, db, make_contest):
    contest = make_contest()
    contest_id = contest.id
    assert client.delete(f"/api/v1/contests/{contest_id}", headers=auth_headers(ADMIN)).status_code == 204
    assert db.query(Contest).filter(Contest.id == contest_id).count() == 0
    assert client.get(f"/api/v1/contests/{contest_id}").status_code == 404


def test_unexpected_failure_is_generic_500(client, db, monkeypatch):
    company = _company(db)

    def broken_create(*args, **kwargs):
        raise RuntimeError("db host secret-db:5432 unreachable")

    monkeypatch.setattr("app.api.v1.endpoints.contests.create_contest", broken_create)
    quiet_client = TestClient(app, raise_server_exceptions=False)

    response = quiet_client.post(
        "/api/v1/contests", json=_payload(company.id), headers=auth_headers("organizer")
    )
    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}
    assert "secret" not in response.text
