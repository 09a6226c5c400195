"""
Contest submissions.

An APPROVED participant enters a submission in one of the contest's categories
while the contest is REGISTRATION_OPEN or JUDGING. Entries start as DRAFT; the
owner moves them to SUBMITTED and only submission managers move them further.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from app.core.exceptions import DomainError, PermissionDeniedError
from app.models.category import ContestCategory
from app.models.contest import ContestStatus
from app.models.ganado import Ganado
from app.models.participation import ContestParticipation, ParticipationStatus
from app.models.submission import MANAGER_ONLY_STATUSES, ContestSubmission, SubmissionStatus

logger = logging.getLogger(__name__)

ACCEPTING_SUBMISSIONS = {ContestStatus.REGISTRATION_OPEN.value, ContestStatus.JUDGING.value}


def _check_category(db: Session, contest_id: uuid.UUID, category_id: uuid.UUID) -> None:
    category = (
        db.query(ContestCategory.id)
        .filter(ContestCategory.id == category_id, ContestCategory.contest_id == contest_id)
        .first()
    )
    if not category:
        raise DomainError("Invalid category")


def _check_ganado(db: Session, ganado_id: uuid.UUID | None) -> None:
    if ganado_id and db.get(Ganado, ganado_id) is None:
        raise DomainError("Invalid ganado")


def create_submission(
    db: Session,
    contest_id: uuid.UUID,
    user_id: str,
    *,
    category_id: uuid.UUID,
    title: str,
    description: str | None = None,
    ganado_id: uuid.UUID | None = None,
    metadata: dict | None = None,
) -> ContestSubmission:
    participation = (
        db.query(ContestParticipation)
        .filter(ContestParticipation.user_id == user_id, ContestParticipation.contest_id == contest_id)
        .first()
    )
    if not participation:
        raise DomainError("You are not registered for this contest")
    if participation.status != ParticipationStatus.APPROVED.value:
        raise DomainError("Your participation has not been approved yet")
    if participation.contest.status not in ACCEPTING_SUBMISSIONS:
        raise DomainError("Contest is not accepting submissions at this time")

    _check_category(db, contest_id, category_id)
    _check_ganado(db, ganado_id)

    submission = ContestSubmission(
        participation_id=participation.id,
        category_id=category_id,
        ganado_id=ganado_id,
        title=title,
        description=description,
        metadata_=metadata,
        status=SubmissionStatus.DRAFT.value,
    )
    db.add(submission)
    db.commit()
    db.refresh(submission)

    logger.info("Submission %s created by '%s' in contest %s", submission.id, user_id, contest_id)
    return submission


def update_submission(
    db: Session,
    submission: ContestSubmission,
    changes: dict,
    is_manager: bool,
) -> ContestSubmission:
    new_status = changes.pop("status", None)
    if new_status is not None and new_status.value == submission.status:
        new_status = None
    if new_status is not None and new_status.value in MANAGER_ONLY_STATUSES and not is_manager:
        raise PermissionDeniedError("You do not have permission to change to this status")
    if "ganado_id" in changes:
        _check_ganado(db, changes["ganado_id"])

    if new_status is not None:
        if (
            new_status is SubmissionStatus.SUBMITTED
            and submission.status == SubmissionStatus.DRAFT.value
        ):
            submission.submitted_at = datetime.now(timezone.utc)
        submission.status = new_status.value

    if "metadata" in changes:
        changes["metadata_"] = changes.pop("metadata")

    for key, value in changes.items():
        setattr(submission, key, value)
    db.commit()
    db.refresh(submission)
    return submission


def delete_submission(
    db: Session, submission: ContestSubmission, is_manager: bool
) -> None:
    """Delete a submission with its media and scores; owners may only delete drafts."""
    if not is_manager and submission.status != SubmissionStatus.DRAFT.value:
        raise DomainError("Only draft submissions can be deleted")
    db.delete(submission)
    db.commit()
    logger.info("Submission %s deleted", submission.id)
