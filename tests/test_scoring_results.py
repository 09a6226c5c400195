import uuid

import pytest

from app.core.auth import create_access_token
from app.models.contest import Contest
from app.models.judging import JudgingScore
from app.models.submission import ContestSubmission
from app.services.results import weighted_total
from conftest import ADMIN, auth_headers

JUDGE = "judge-1"
ENTRANT = "entrant-1"


def test_weighted_total():
    assert weighted_total([
        {"average": 8, "weight": 2},
        {"average": 5, "weight": 1},
    ]) == pytest.approx(7.0)


def test_weighted_total_with_zero_weights():
    assert weighted_total([{"average": 9, "weight": 0}]) == 0
    assert weighted_total([]) == 0


@pytest.fixture
def judged_setup(client, make_contest):
    """Open contest with one category, two criteria, an approved entrant and an assigned judge."""
    contest = make_contest()
    base = f"/api/v1/contests/{contest.id}"
    admin = auth_headers(ADMIN)

    category_id = client.post(f"{base}/categories", json={"name": "Vaquillas"}, headers=admin).json()["id"]
    general_id = client.post(
        f"{base}/criteria", json={"name": "Conformación", "weight": 2, "max_score": 10}, headers=admin
    ).json()["id"]
    specific_id = client.post(
        f"{base}/criteria",
        json={"name": "Aplomos", "weight": 1, "max_score": 10, "category_id": category_id, "order": 1},
        headers=admin,
    ).json()["id"]

    participation_id = client.post(f"{base}/participants", headers=auth_headers(ENTRANT)).json()["id"]
    client.put(f"{base}/participants/{participation_id}", json={"status": "APPROVED"}, headers=admin)

    client.get("/api/v1/auth/me", headers=auth_headers(JUDGE))
    assert client.post(f"{base}/judges", json={"judge_id": JUDGE}, headers=admin).status_code == 201

    return {
        "contest": contest,
        "base": base,
        "category_id": category_id,
        "general_id": general_id,
        "specific_id": specific_id,
        "participation_id": participation_id,
    }


def _submit(client, setup) -> str:
    response = client.post(
        f"{setup['base']}/submissions",
        json={"category_id": setup["category_id"], "title": "Lucera", "metadata": {"arete": "MX-123"}},
        headers=auth_headers(ENTRANT),
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_submission_requires_approved_participation(client, make_contest):
    contest = make_contest()
    base = f"/api/v1/contests/{contest.id}"
    category_id = client.post(
        f"{base}/categories", json={"name": "Vaquillas"}, headers=auth_headers(ADMIN)
    ).json()["id"]

    payload = {"category_id": category_id, "title": "Lucera"}
    response = client.post(f"{base}/submissions", json=payload, headers=auth_headers(ENTRANT))
    assert response.json()["detail"] == "You are not registered for this contest"

    client.post(f"{base}/participants", headers=auth_headers(ENTRANT))
    response = client.post(f"{base}/submissions", json=payload, headers=auth_headers(ENTRANT))
    assert response.status_code == 400
    assert response.json()["detail"] == "Your participation has not been approved yet"


def test_submission_lifecycle(client, judged_setup):
    base = judged_setup["base"]
    submission_id = _submit(client, judged_setup)
    url = f"{base}/submissions/{submission_id}"

    created = client.get(url, headers=auth_headers(ENTRANT)).json()
    assert created["status"] == "DRAFT"
    assert created["metadata"] == {"arete": "MX-123"}
    assert created["submitted_at"] is None

    submitted = client.put(url, json={"status": "SUBMITTED"}, headers=auth_headers(ENTRANT))
    assert submitted.status_code == 200
    assert submitted.json()["submitted_at"] is not None

    forbidden = client.put(url, json={"status": "JUDGED"}, headers=auth_headers(ENTRANT))
    assert forbidden.status_code == 403

    assert client.get(url, headers=auth_headers(JUDGE)).status_code == 200
    assert client.get(url, headers=auth_headers("stranger")).status_code == 403

    refused = client.delete(url, headers=auth_headers(ENTRANT))
    assert refused.status_code == 400
    assert refused.json()["detail"] == "Only draft submissions can be deleted"


def test_submission_listing_is_scoped(client, judged_setup):
    base = judged_setup["base"]
    _submit(client, judged_setup)

    assert client.get(f"{base}/submissions", headers=auth_headers(ENTRANT)).json()["total"] == 1
    assert client.get(f"{base}/submissions", headers=auth_headers(JUDGE)).json()["total"] == 1
    assert client.get(f"{base}/submissions", headers=auth_headers("stranger")).json()["total"] == 0


def test_scoring_marks_submission_judged(client, db, judged_setup):
    base = judged_setup["base"]
    submission_id = _submit(client, judged_setup)
    scores_url = f"{base}/submissions/{submission_id}/scores"
    judge = auth_headers(JUDGE)

    too_high = client.post(
        scores_url, json={"criteria_id": judged_setup["specific_id"], "score": 11}, headers=judge
    )
    assert too_high.status_code == 400
    assert too_high.json()["detail"] == "Score cannot exceed maximum score of 10"

    negative = client.post(
        scores_url, json={"criteria_id": judged_setup["general_id"], "score": -1}, headers=judge
    )
    assert negative.status_code == 400
    assert negative.json()["detail"] == "Score must be a positive number"

    not_a_judge = client.post(
        scores_url, json={"criteria_id": judged_setup["general_id"], "score": 5},
        headers=auth_headers(ENTRANT),
    )
    assert not_a_judge.status_code == 403

    first = client.post(scores_url, json={"criteria_id": judged_setup["general_id"], "score": 7}, headers=judge)
    assert first.status_code == 201
    assert client.get(f"{base}/submissions/{submission_id}", headers=judge).json()["status"] == "DRAFT"

    # Scoring the same criterion again overwrites it
    client.post(scores_url, json={"criteria_id": judged_setup["general_id"], "score": 8}, headers=judge)
    client.post(scores_url, json={"criteria_id": judged_setup["specific_id"], "score": 5}, headers=judge)

    assert db.query(JudgingScore).count() == 2
    assert client.get(f"{base}/submissions/{submission_id}", headers=judge).json()["status"] == "JUDGED"

    listed = client.get(scores_url, headers=auth_headers(ENTRANT)).json()
    assert [s["score"] for s in listed] == [8, 5]


def test_results_visibility_and_publication(client, db, judged_setup):
    base = judged_setup["base"]
    submission_id = _submit(client, judged_setup)
    scores_url = f"{base}/submissions/{submission_id}/scores"
    judge = auth_headers(JUDGE)
    client.post(scores_url, json={"criteria_id": judged_setup["general_id"], "score": 8}, headers=judge)
    client.post(scores_url, json={"criteria_id": judged_setup["specific_id"], "score": 5}, headers=judge)

    assert client.get(f"{base}/results").status_code == 401

    results = client.get(f"{base}/results", headers=auth_headers(ENTRANT)).json()
    [category] = results["categories"]
    assert category["category_name"] == "Vaquillas"
    [entry] = category["submissions"]
    assert entry["submission_id"] == submission_id
    assert entry["participant_id"] == ENTRANT
    assert entry["total_score"] == pytest.approx(7.0)

    assert client.post(f"{base}/results", headers=auth_headers(ENTRANT)).status_code == 403
    published = client.post(f"{base}/results", headers=auth_headers(ADMIN))
    assert published.status_code == 200
    assert published.json()["status"] == "COMPLETED"
    assert published.json()["results_published"] is not None

    public = client.get(f"{base}/results")
    assert public.status_code == 200
    assert public.json()["categories"][0]["submissions"][0]["total_score"] == pytest.approx(7.0)

    export = client.get(f"{base}/results/export")
    assert export.status_code == 200
    assert export.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )


def test_results_rank_highest_first(client, db, judged_setup):
    base = judged_setup["base"]
    judge = auth_headers(JUDGE)

    first_id = _submit(client, judged_setup)
    second = client.post(
        f"{base}/submissions",
        json={"category_id": judged_setup["category_id"], "title": "Estrella"},
        headers=auth_headers(ENTRANT),
    ).json()["id"]

    for submission_id, general, specific in ((first_id, 6, 6), (second, 9, 9)):
        url = f"{base}/submissions/{submission_id}/scores"
        client.post(url, json={"criteria_id": judged_setup["general_id"], "score": general}, headers=judge)
        client.post(url, json={"criteria_id": judged_setup["specific_id"], "score": specific}, headers=judge)

    ranked = client.get(f"{base}/results", headers=judge).json()["categories"][0]["submissions"]
    assert [r["title"] for r in ranked] == ["Estrella", "Lucera"]


def test_stats(client, judged_setup):
    base = judged_setup["base"]
    _submit(client, judged_setup)

    assert client.get(f"{base}/stats", headers=auth_headers(ENTRANT)).status_code == 403
    stats = client.get(f"{base}/stats", headers=auth_headers(ADMIN)).json()
    assert stats["total_participants"] == 1
    assert stats["total_submissions"] == 1
    assert stats["total_categories"] == 1
    assert stats["total_judges"] == 1
    assert stats["submissions_by_status"] == {"DRAFT": 1}
    assert stats["participations_by_status"] == {"APPROVED": 1}


def test_deleting_contest_removes_submissions(client, db, judged_setup):
    _submit(client, judged_setup)
    contest_id = judged_setup["contest"].id
    assert client.delete(f"/api/v1/contests/{contest_id}", headers=auth_headers(ADMIN)).status_code == 204
    assert db.query(Contest).count() == 0
    assert db.query(ContestSubmission).count() == 0


def test_withdrawal_keeps_scored_entries(client, db, judged_setup):
    base = judged_setup["base"]
    submission_id = _submit(client, judged_setup)
    scores_url = f"{base}/submissions/{submission_id}/scores"
    judge = auth_headers(JUDGE)
    client.post(scores_url, json={"criteria_id": judged_setup["general_id"], "score": 8}, headers=judge)
    client.post(scores_url, json={"criteria_id": judged_setup["specific_id"], "score": 6}, headers=judge)
    participation_url = f"{base}/participants/{judged_setup['participation_id']}"

    for headers in (auth_headers(ENTRANT), auth_headers(ADMIN)):
        refused = client.delete(participation_url, headers=headers)
        assert refused.status_code == 400
        assert refused.json()["detail"] == "Cannot withdraw a participation whose submissions have scores"

    assert db.query(JudgingScore).count() == 2
    assert db.get(ContestSubmission, uuid.UUID(submission_id)) is not None
    assert client.delete(f"{base}/judges/{JUDGE}", headers=auth_headers(ADMIN)).status_code == 400


def test_owner_withdrawal_needs_draft_submissions(client, db, judged_setup):
    base = judged_setup["base"]
    submission_id = _submit(client, judged_setup)
    client.put(
        f"{base}/submissions/{submission_id}", json={"status": "SUBMITTED"}, headers=auth_headers(ENTRANT)
    )
    participation_url = f"{base}/participants/{judged_setup['participation_id']}"

    refused = client.delete(participation_url, headers=auth_headers(ENTRANT))
    assert refused.status_code == 400
    assert refused.json()["detail"] == "Only participations with draft submissions can be withdrawn"

    assert client.delete(participation_url, headers=auth_headers(ADMIN)).status_code == 204
    assert db.query(ContestSubmission).count() == 0


def test_published_results_ignore_unusable_tokens(client, db, judged_setup):
    base = judged_setup["base"]
    expired = create_access_token(ENTRANT, expires_minutes=-5)

    # Unpublished: a bad token counts as anonymous
    hidden = client.get(f"{base}/results", headers={"Authorization": f"Bearer {expired}"})
    assert hidden.status_code == 401
    assert hidden.json()["detail"] == "Results not yet published"

    client.post(f"{base}/results", headers=auth_headers(ADMIN))
    for token in (expired, "not-a-jwt"):
        response = client.get(f"{base}/results", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
