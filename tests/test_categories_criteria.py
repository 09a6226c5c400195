from app.models.category import ContestCategory
from app.models.judging import JudgingCriteria, JudgingScore
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission
from conftest import ADMIN, add_user, auth_headers


def test_livestock_category_drops_product_fields(client, make_contest):
    contest = make_contest()
    response = client.post(
        f"/api/v1/contests/{contest.id}/categories",
        json={"name": "Toros jóvenes", "sexo": "MACHO", "age_max": 365, "product_type": "grano"},
        headers=auth_headers(ADMIN),
    )
    assert response.status_code == 201
    body = response.json()
    assert body["sexo"] == "MACHO"
    assert body["age_max"] == 365
    assert body["product_type"] is None


def test_product_category_drops_livestock_fields(client, make_contest):
    contest = make_contest(type="COFFEE_PRODUCTS")
    response = client.post(
        f"/api/v1/contests/{contest.id}/categories",
        json={"name": "Café lavado", "sexo": "HEMBRA", "product_type": "café", "weight_min": 0.5},
        headers=auth_headers(ADMIN),
    )
    body = response.json()
    assert body["sexo"] is None
    assert body["product_type"] == "café"
    assert body["weight_min"] == 0.5


def test_category_management_requires_permission(client, make_contest):
    contest = make_contest()
    url = f"/api/v1/contests/{contest.id}/categories"
    assert client.post(url, json={"name": "X"}).status_code == 401
    assert client.post(url, json={"name": "X"}, headers=auth_headers("u1")).status_code == 403
    assert client.get(url).status_code == 200


def test_category_with_submissions_cannot_be_deleted(client, db, make_contest):
    contest = make_contest()
    category = ContestCategory(contest_id=contest.id, name="Vacas adultas")
    add_user(db, "u1")
    participation = ContestParticipation(user_id="u1", contest_id=contest.id, status="APPROVED")
    db.add_all([category, participation])
    db.flush()
    db.add(ContestSubmission(participation_id=participation.id, category_id=category.id, title="Perla"))
    db.commit()

    url = f"/api/v1/contests/{contest.id}/categories/{category.id}"
    response = client.delete(url, headers=auth_headers(ADMIN))
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete category with submissions"
    assert client.get(url).json()["submission_count"] == 1


def test_category_update_and_delete(client, make_contest):
    contest = make_contest()
    url = f"/api/v1/contests/{contest.id}/categories"
    category_id = client.post(url, json={"name": "Terneras"}, headers=auth_headers(ADMIN)).json()["id"]

    response = client.put(
        f"{url}/{category_id}", json={"name": "Terneras menores", "order": 2}, headers=auth_headers(ADMIN)
    )
    assert response.json()["name"] == "Terneras menores"
    assert response.json()["order"] == 2

    assert client.delete(f"{url}/{category_id}", headers=auth_headers(ADMIN)).status_code == 204
    assert client.get(f"{url}/{category_id}").status_code == 404


def test_criteria_at_contest_and_category_level(client, make_contest):
    contest = make_contest()
    category_id = client.post(
        f"/api/v1/contests/{contest.id}/categories", json={"name": "Novillos"}, headers=auth_headers(ADMIN)
    ).json()["id"]
    url = f"/api/v1/contests/{contest.id}/criteria"

    general = client.post(url, json={"name": "Conformación", "weight": 2}, headers=auth_headers(ADMIN))
    assert general.status_code == 201
    assert general.json()["contest_id"] == str(contest.id)
    assert general.json()["max_score"] == 100

    specific = client.post(
        url, json={"name": "Aplomos", "category_id": category_id, "order": 1}, headers=auth_headers(ADMIN)
    )
    assert specific.status_code == 201
    assert specific.json()["contest_id"] is None
    assert specific.json()["category_id"] == category_id

    assert [c["name"] for c in client.get(url).json()] == ["Conformación", "Aplomos"]
    assert [c["name"] for c in client.get(url, params={"category_id": category_id}).json()] == ["Aplomos"]


def test_criteria_with_foreign_category_is_rejected(client, make_contest):
    contest = make_contest()
    other = make_contest()
    foreign_category = client.post(
        f"/api/v1/contests/{other.id}/categories", json={"name": "Ajena"}, headers=auth_headers(ADMIN)
    ).json()["id"]

    response = client.post(
        f"/api/v1/contests/{contest.id}/criteria",
        json={"name": "Aplomos", "category_id": foreign_category},
        headers=auth_headers(ADMIN),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid category"


def test_criteria_of_other_contest_is_404(client, make_contest):
    contest = make_contest()
    other = make_contest()
    criteria_id = client.post(
        f"/api/v1/contests/{other.id}/criteria", json={"name": "Tipo"}, headers=auth_headers(ADMIN)
    ).json()["id"]

    response = client.get(f"/api/v1/contests/{contest.id}/criteria/{criteria_id}")
    assert response.status_code == 404
    assert response.json()["detail"] == "Criteria not found in this contest"


def test_criteria_with_scores_cannot_be_deleted(client, db, make_contest):
    contest = make_contest()
    criteria = JudgingCriteria(contest_id=contest.id, name="Tipo racial")
    category = ContestCategory(contest_id=contest.id, name="Vacas")
    add_user(db, "u1")
    add_user(db, "judge-1")
    participation = ContestParticipation(user_id="u1", contest_id=contest.id, status="APPROVED")
    db.add_all([criteria, category, participation])
    db.flush()
    submission = ContestSubmission(participation_id=participation.id, category_id=category.id, title="Rubí")
    db.add(submission)
    db.flush()
    db.add(JudgingScore(judge_id="judge-1", submission_id=submission.id, criteria_id=criteria.id, score=7))
    db.commit()

    url = f"/api/v1/contests/{contest.id}/criteria/{criteria.id}"
    response = client.delete(url, headers=auth_headers(ADMIN))
    assert response.status_code == 400
    assert response.json()["detail"] == "Cannot delete criteria with scores"
