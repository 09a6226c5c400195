"""
Judge assignment lifecycle for a contest.

Assigning creates the JudgingAssignment row and the JUDGE role row together.
Removal deletes both together, and is refused once the judge has scored any
submission of the contest so that every score keeps its judge.
"""

import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.exceptions import ConflictError, DomainError, NotFoundError
from app.core.permissions import holds_role
from app.models.contest import Contest
from app.models.contest_role import ContestRole, ContestUserRole
from app.models.judging import JudgingAssignment, JudgingScore
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission
from app.models.user import User

logger = logging.getLogger(__name__)

ALREADY_ASSIGNED = "Judge is already assigned to this contest"


def list_judges(db: Session, contest_id: uuid.UUID) -> list[JudgingAssignment]:
    return (
        db.query(JudgingAssignment)
        .options(joinedload(JudgingAssignment.judge))
        .filter(JudgingAssignment.contest_id == contest_id)
        .order_by(JudgingAssignment.assigned_at)
        .all()
    )


def judge_has_scores(db: Session, contest_id: uuid.UUID, judge_id: str) -> bool:
    """True if the judge scored any submission whose participation belongs to the contest."""
    score = (
        db.query(JudgingScore.id)
        .join(ContestSubmission, JudgingScore.submission_id == ContestSubmission.id)
        .join(ContestParticipation, ContestSubmission.participation_id == ContestParticipation.id)
        .filter(
            JudgingScore.judge_id == judge_id,
            ContestParticipation.contest_id == contest_id,
        )
        .first()
    )
    return score is not None


def assign_judge(db: Session, contest_id: uuid.UUID, judge_id: str) -> JudgingAssignment:
    if db.get(Contest, contest_id) is None:
        raise NotFoundError("Contest not found")
    if db.get(User, judge_id) is None:
        raise NotFoundError("User not found")

    existing = (
        db.query(JudgingAssignment)
        .filter(JudgingAssignment.judge_id == judge_id, JudgingAssignment.contest_id == contest_id)
        .first()
    )
    if existing:
        raise ConflictError(ALREADY_ASSIGNED)

    assignment = JudgingAssignment(judge_id=judge_id, contest_id=contest_id)
    db.add(assignment)

    if not holds_role(db, judge_id, contest_id, ContestRole.JUDGE):
        db.add(ContestUserRole(user_id=judge_id, contest_id=contest_id, role=ContestRole.JUDGE.value))

    try:
        db.commit()
    except IntegrityError:
        # A concurrent request created the same assignment
        db.rollback()
        raise ConflictError(ALREADY_ASSIGNED)

    db.refresh(assignment)
    logger.info("Judge '%s' assigned to contest %s", judge_id, contest_id)
    return assignment


def remove_judge(db: Session, contest_id: uuid.UUID, judge_id: str) -> None:
    assignment = (
        db.query(JudgingAssignment)
        .filter(JudgingAssignment.judge_id == judge_id, JudgingAssignment.contest_id == contest_id)
        .first()
    )
    if not assignment:
        raise NotFoundError("Judge is not assigned to this contest")

    if judge_has_scores(db, contest_id, judge_id):
        raise DomainError("Cannot remove judge who has already submitted scores")

    db.delete(assignment)
    db.query(ContestUserRole).filter(
        ContestUserRole.user_id == judge_id,
        ContestUserRole.contest_id == contest_id,
        ContestUserRole.role == ContestRole.JUDGE.value,
    ).delete(synchronize_session=False)
    db.commit()

    logger.info("Judge '%s' removed from contest %s", judge_id, contest_id)
