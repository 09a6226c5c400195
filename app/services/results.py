"""
Contest results.

For every JUDGED submission the scores are averaged per criterion, then combined
into a weighted total: sum(average * weight) / sum(weight). Submissions are
grouped by category and ranked by total, highest first.
"""

import uuid
from collections import defaultdict
from datetime import datetime, timezone

from sqlalchemy.orm import Session, joinedload

from app.models.contest import Contest, ContestStatus
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission, SubmissionStatus


def results_are_public(contest: Contest) -> bool:
    return (
        contest.status == ContestStatus.COMPLETED.value
        and contest.results_published is not None
    )


def weighted_total(criteria_scores: list[dict]) -> float:
    total_weight = sum(c["weight"] for c in criteria_scores)
    weighted = sum(c["average"] * c["weight"] for c in criteria_scores)
    return weighted / (total_weight or 1)


def _criteria_scores(submission: ContestSubmission) -> list[dict]:
    grouped: dict[uuid.UUID, dict] = {}
    for score in submission.scores:
        entry = grouped.setdefault(
            score.criteria_id, {"criteria": score.criteria, "scores": []}
        )
        entry["scores"].append(score.score)

    return [
        {
            "criteria_id": criteria_id,
            "criteria_name": entry["criteria"].name,
            "weight": entry["criteria"].weight,
            "average": sum(entry["scores"]) / len(entry["scores"]),
            "scores": entry["scores"],
        }
        for criteria_id, entry in grouped.items()
    ]


def compute_results(db: Session, contest_id: uuid.UUID) -> dict:
    submissions = (
        db.query(ContestSubmission)
        .join(ContestParticipation, ContestSubmission.participation_id == ContestParticipation.id)
        .options(
            joinedload(ContestSubmission.category),
            joinedload(ContestSubmission.participation).joinedload(ContestParticipation.user),
            joinedload(ContestSubmission.scores),
            joinedload(ContestSubmission.media),
        )
        .filter(
            ContestParticipation.contest_id == contest_id,
            ContestSubmission.status == SubmissionStatus.JUDGED.value,
        )
        .all()
    )

    categories: dict[uuid.UUID, dict] = {}
    by_category: dict[uuid.UUID, list[dict]] = defaultdict(list)
    for submission in submissions:
        criteria_scores = _criteria_scores(submission)
        user = submission.participation.user
        primary = next((m for m in submission.media if m.is_primary), None)

        categories.setdefault(submission.category_id, {
            "category_id": submission.category_id,
            "category_name": submission.category.name,
        })
        by_category[submission.category_id].append({
            "submission_id": submission.id,
            "title": submission.title,
            "participant_id": submission.participation.user_id,
            "participant_name": (user.nombre or user.email) if user else None,
            "ganado_id": submission.ganado_id,
            "media_url": primary.url if primary else None,
            "criteria_scores": criteria_scores,
            "total_score": weighted_total(criteria_scores),
        })

    return {
        "contest_id": contest_id,
        "categories": [
            {
                **categories[category_id],
                "submissions": sorted(ranked, key=lambda r: r["total_score"], reverse=True),
            }
            for category_id, ranked in by_category.items()
        ],
    }


def publish_results(db: Session, contest: Contest) -> Contest:
    contest.status = ContestStatus.COMPLETED.value
    contest.results_published = datetime.now(timezone.utc)
    db.commit()
    db.refresh(contest)
    return contest
