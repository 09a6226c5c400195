"""
Judging scores.

A judge records one score per (submission, criterion); recording again
overwrites it. Once the judge has scored every criterion that applies to a
submission (contest-level ones plus those of its category), the submission is
marked JUDGED.
"""

import logging
import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DomainError, NotFoundError
from app.models.category import ContestCategory
from app.models.judging import JudgingCriteria, JudgingScore
from app.models.submission import ContestSubmission, SubmissionStatus

logger = logging.getLogger(__name__)


def get_submission_in_contest(
    db: Session, contest_id: uuid.UUID, submission_id: uuid.UUID
) -> ContestSubmission:
    submission = db.get(ContestSubmission, submission_id)
    if not submission:
        raise NotFoundError("Submission not found")
    if submission.participation.contest_id != contest_id:
        raise NotFoundError("Submission not found in this contest")
    return submission


def criteria_belongs_to_contest(
    db: Session, criteria: JudgingCriteria, contest_id: uuid.UUID
) -> bool:
    if criteria.contest_id == contest_id:
        return True
    if criteria.category_id is None:
        return False
    category = (
        db.query(ContestCategory.id)
        .filter(ContestCategory.id == criteria.category_id, ContestCategory.contest_id == contest_id)
        .first()
    )
    return category is not None


def get_criteria_in_contest(
    db: Session, contest_id: uuid.UUID, criteria_id: uuid.UUID
) -> JudgingCriteria:
    criteria = db.get(JudgingCriteria, criteria_id)
    if not criteria:
        raise NotFoundError("Criteria not found")
    if not criteria_belongs_to_contest(db, criteria, contest_id):
        raise NotFoundError("Criteria not found in this contest")
    return criteria


def applicable_criteria_ids(
    db: Session, contest_id: uuid.UUID, category_id: uuid.UUID
) -> set[uuid.UUID]:
    """Contest-level criteria plus the criteria of one category."""
    rows = (
        db.query(JudgingCriteria.id)
        .filter(or_(
            JudgingCriteria.contest_id == contest_id,
            JudgingCriteria.category_id == category_id,
        ))
        .all()
    )
    return {r.id for r in rows}


def list_scores(db: Session, submission_id: uuid.UUID) -> list[JudgingScore]:
    return (
        db.query(JudgingScore)
        .join(JudgingCriteria, JudgingScore.criteria_id == JudgingCriteria.id)
        .filter(JudgingScore.submission_id == submission_id)
        .order_by(JudgingCriteria.order, JudgingScore.scored_at.desc())
        .all()
    )


def record_score(
    db: Session,
    *,
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    judge_id: str,
    criteria_id: uuid.UUID,
    score: float,
    comments: str | None = None,
) -> JudgingScore:
    submission = get_submission_in_contest(db, contest_id, submission_id)

    if score < 0:
        raise DomainError("Score must be a positive number")

    criteria = get_criteria_in_contest(db, contest_id, criteria_id)
    if criteria.category_id not in (None, submission.category_id):
        raise DomainError("Criteria does not apply to this submission's category")
    if score > criteria.max_score:
        raise DomainError(f"Score cannot exceed maximum score of {criteria.max_score:g}")

    judging_score = (
        db.query(JudgingScore)
        .filter(
            JudgingScore.judge_id == judge_id,
            JudgingScore.submission_id == submission.id,
            JudgingScore.criteria_id == criteria.id,
        )
        .first()
    )
    if judging_score:
        judging_score.score = score
        judging_score.comments = comments
    else:
        judging_score = JudgingScore(
            judge_id=judge_id,
            submission_id=submission.id,
            criteria_id=criteria.id,
            score=score,
            comments=comments,
        )
        db.add(judging_score)

    try:
        db.flush()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Score was recorded concurrently, retry the request")

    scored = {
        r.criteria_id
        for r in db.query(JudgingScore.criteria_id).filter(
            JudgingScore.judge_id == judge_id,
            JudgingScore.submission_id == submission.id,
        )
    }
    if applicable_criteria_ids(db, contest_id, submission.category_id) <= scored:
        submission.status = SubmissionStatus.JUDGED.value
        logger.info("Submission %s fully scored by '%s', marked JUDGED", submission.id, judge_id)

    db.commit()
    db.refresh(judging_score)
    logger.info(
        "Judge '%s' scored %s on criteria %s of submission %s",
        judge_id, score, criteria.id, submission.id,
    )
    return judging_score
