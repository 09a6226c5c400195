import uuid

from app.models.contest_role import ContestRole, ContestUserRole
from app.models.user import User
from conftest import ADMIN, add_user, auth_headers


def test_missing_token_is_401_before_permission_check(client, make_contest):
    contest = make_contest()
    response = client.put(f"/api/v1/contests/{contest.id}", json={"name": "Otro"})
    assert response.status_code == 401


def test_invalid_token_is_401(client, make_contest):
    contest = make_contest()
    response = client.put(
        f"/api/v1/contests/{contest.id}",
        json={"name": "Otro"},
        headers={"Authorization": "Bearer not-a-jwt"},
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_authenticated_without_permission_is_403(client, make_contest):
    contest = make_contest()
    response = client.put(
        f"/api/v1/contests/{contest.id}", json={"name": "Otro"}, headers=auth_headers("stranger")
    )
    assert response.status_code == 403


def test_judge_cannot_manage_contest(client, db, make_contest):
    contest = make_contest()
    add_user(db, "judge-1")
    db.add(ContestUserRole(user_id="judge-1", contest_id=contest.id, role=ContestRole.JUDGE.value))
    db.commit()

    response = client.delete(f"/api/v1/contests/{contest.id}", headers=auth_headers("judge-1"))
    assert response.status_code == 403


def test_admin_passes_gate(client, make_contest):
    contest = make_contest()
    response = client.put(
        f"/api/v1/contests/{contest.id}", json={"rules": "Reglamento"}, headers=auth_headers(ADMIN)
    )
    assert response.status_code == 200
    assert response.json()["rules"] == "Reglamento"


def test_unknown_subject_is_provisioned(client, db):
    response = client.get("/api/v1/auth/me", headers=auth_headers("newcomer"))
    assert response.status_code == 200
    assert response.json()["id"] == "newcomer"
    assert db.query(User).filter(User.id == "newcomer").count() == 1


def test_inactive_user_is_rejected(client, db):
    user = add_user(db, "retired")
    user.activo = False
    db.commit()

    response = client.get("/api/v1/auth/me", headers=auth_headers("retired"))
    assert response.status_code == 401


def test_permissions_endpoint(client, make_contest):
    contest = make_contest()

    response = client.get(f"/api/v1/contests/{contest.id}/permissions", headers=auth_headers(ADMIN))
    body = response.json()
    assert body["role"] == "CONTEST_ADMINISTRATOR"
    assert all(body["permissions"].values())

    response = client.get(
        f"/api/v1/contests/{contest.id}/permissions", headers=auth_headers("visitor")
    )
    body = response.json()
    assert body["role"] is None
    assert body["permissions"]["canViewResults"] is True
    assert body["permissions"]["canManageContest"] is False


def test_permissions_of_missing_contest_is_404(client):
    response = client.get(f"/api/v1/contests/{uuid.uuid4()}/permissions", headers=auth_headers(ADMIN))
    assert response.status_code == 404
