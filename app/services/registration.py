"""
Contest registration: admission control and participation management.

A participation request is admitted only when the contest is open for
registration, the current time is inside [registration_start, registration_end),
the participant cap (if any) has not been reached and the user is not already
registered. Admission writes the participation and the PARTICIPANT role together.
"""

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DomainError, NotFoundError
from app.core.permissions import holds_role
from app.models.contest import Contest, ContestStatus
from app.models.contest_role import ContestRole, ContestUserRole
from app.models.judging import JudgingScore
from app.models.participation import ContestParticipation, ParticipationStatus
from app.models.submission import SubmissionStatus

logger = logging.getLogger(__name__)

REGISTRATION_NOT_OPEN = "Registration is not open for this contest"
PARTICIPANT_CAP_REACHED = "Maximum number of participants reached"
ALREADY_REGISTERED = "You are already registered for this contest"
WITHDRAW_SCORED = "Cannot withdraw a participation whose submissions have scores"
WITHDRAW_SUBMITTED = "Only participations with draft submissions can be withdrawn"


def as_utc(value: datetime) -> datetime:
    """Naive datetimes coming back from the store are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_admission(
    contest: Contest,
    participant_count: int,
    already_registered: bool,
    now: datetime,
) -> None:
    """Raise a DomainError if a new participation must not be admitted."""
    now = as_utc(now)
    if (
        contest.status != ContestStatus.REGISTRATION_OPEN.value
        or now < as_utc(contest.registration_start)
        or now >= as_utc(contest.registration_end)
    ):
        raise DomainError(REGISTRATION_NOT_OPEN)

    if contest.max_participants is not None and participant_count >= contest.max_participants:
        raise DomainError(PARTICIPANT_CAP_REACHED)

    if already_registered:
        raise ConflictError(ALREADY_REGISTERED)


def register_participant(
    db: Session,
    contest_id: uuid.UUID,
    user_id: str,
    now: datetime | None = None,
) -> ContestParticipation:
    contest = db.get(Contest, contest_id)
    if not contest:
        raise NotFoundError("Contest not found")

    participant_count = (
        db.query(func.count(ContestParticipation.id))
        .filter(ContestParticipation.contest_id == contest_id)
        .scalar()
    )
    already_registered = (
        db.query(ContestParticipation.id)
        .filter(ContestParticipation.user_id == user_id, ContestParticipation.contest_id == contest_id)
        .first()
        is not None
    )
    check_admission(contest, participant_count, already_registered, now or datetime.now(timezone.utc))

    participation = ContestParticipation(
        user_id=user_id,
        contest_id=contest_id,
        status=ParticipationStatus.PENDING.value,
    )
    db.add(participation)
    if not holds_role(db, user_id, contest_id, ContestRole.PARTICIPANT):
        db.add(ContestUserRole(user_id=user_id, contest_id=contest_id, role=ContestRole.PARTICIPANT.value))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError(ALREADY_REGISTERED)

    db.refresh(participation)
    logger.info("User '%s' registered for contest %s", user_id, contest_id)
    return participation


def update_participation(
    db: Session,
    participation: ContestParticipation,
    status: ParticipationStatus,
    notes: str | None = None,
) -> ContestParticipation:
    participation.status = status.value
    if notes is not None:
        participation.notes = notes
    if status is ParticipationStatus.APPROVED:
        participation.approved_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(participation)

    logger.info("Participation %s set to %s", participation.id, status.value)
    return participation


def withdraw_participation(
    db: Session, participation: ContestParticipation, is_manager: bool
) -> None:
    """
    Delete a participation, its submissions and the PARTICIPANT role in one transaction.

    Scored submissions pin the participation for everyone, so every score keeps
    its submission. Owners may only withdraw while all their submissions are drafts.
    """
    submission_ids = [s.id for s in participation.submissions]
    if submission_ids:
        scored = (
            db.query(JudgingScore.id)
            .filter(JudgingScore.submission_id.in_(submission_ids))
            .first()
        )
        if scored is not None:
            raise DomainError(WITHDRAW_SCORED)
    if not is_manager and any(
        s.status != SubmissionStatus.DRAFT.value for s in participation.submissions
    ):
        raise DomainError(WITHDRAW_SUBMITTED)

    user_id, contest_id = participation.user_id, participation.contest_id

    db.delete(participation)
    db.query(ContestUserRole).filter(
        ContestUserRole.user_id == user_id,
        ContestUserRole.contest_id == contest_id,
        ContestUserRole.role == ContestRole.PARTICIPANT.value,
    ).delete(synchronize_session=False)
    db.commit()

    logger.info("Participation of '%s' in contest %s removed", user_id, contest_id)
