import uuid

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models.category import ContestCategory
from app.models.contest_role import ContestRole, ContestUserRole
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission


def contest_stats(db: Session, contest_id: uuid.UUID) -> dict:
    """Counts shown on the contest dashboard."""
    submissions = (
        db.query(ContestSubmission)
        .join(ContestParticipation, ContestSubmission.participation_id == ContestParticipation.id)
        .filter(ContestParticipation.contest_id == contest_id)
    )

    by_category = (
        submissions.with_entities(ContestSubmission.category_id, func.count(ContestSubmission.id))
        .group_by(ContestSubmission.category_id)
        .all()
    )
    by_status = (
        submissions.with_entities(ContestSubmission.status, func.count(ContestSubmission.id))
        .group_by(ContestSubmission.status)
        .all()
    )
    participations_by_status = (
        db.query(ContestParticipation.status, func.count(ContestParticipation.id))
        .filter(ContestParticipation.contest_id == contest_id)
        .group_by(ContestParticipation.status)
        .all()
    )

    return {
        "total_participants": (
            db.query(ContestParticipation)
            .filter(ContestParticipation.contest_id == contest_id)
            .count()
        ),
        "total_submissions": submissions.count(),
        "total_categories": (
            db.query(ContestCategory)
            .filter(ContestCategory.contest_id == contest_id)
            .count()
        ),
        "total_judges": (
            db.query(ContestUserRole)
            .filter(
                ContestUserRole.contest_id == contest_id,
                ContestUserRole.role == ContestRole.JUDGE.value,
            )
            .count()
        ),
        "submissions_by_category": {str(cat_id): n for cat_id, n in by_category},
        "participations_by_status": {st: n for st, n in participations_by_status},
        "submissions_by_status": {st: n for st, n in by_status},
    }
