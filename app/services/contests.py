import logging
import re
import unicodedata
import uuid
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, DomainError, NotFoundError
from app.models.company import Company
from app.models.contest import Contest
from app.models.contest_role import ContestRole, ContestUserRole
from app.services.registration import as_utc

logger = logging.getLogger(__name__)


def slugify(value: str) -> str:
    """'Exposición Holstein 2025' -> 'exposicion-holstein-2025'."""
    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode()
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", ascii_value.strip().lower()).strip("-")
    return cleaned[:200] if cleaned else "concurso"


def validate_schedule(
    registration_start: datetime,
    registration_end: datetime,
    contest_start: datetime,
    contest_end: datetime,
) -> None:
    reg_start, reg_end = as_utc(registration_start), as_utc(registration_end)
    cont_start, cont_end = as_utc(contest_start), as_utc(contest_end)
    if reg_start >= reg_end or reg_end > cont_start or cont_start >= cont_end:
        raise DomainError("Invalid date sequence")


def create_contest(db: Session, creator_id: str, **fields) -> Contest:
    """Create a contest and make its creator the contest administrator."""
    if db.get(Company, fields["company_id"]) is None:
        raise NotFoundError("Company not found")

    validate_schedule(
        fields["registration_start"], fields["registration_end"],
        fields["contest_start"], fields["contest_end"],
    )

    slug = slugify(fields["name"])
    if db.query(Contest.id).filter(Contest.slug == slug).first():
        raise ConflictError("Contest with this name already exists")

    contest = Contest(id=uuid.uuid4(), slug=slug, **fields)
    db.add(contest)
    db.add(ContestUserRole(
        user_id=creator_id,
        contest_id=contest.id,
        role=ContestRole.CONTEST_ADMINISTRATOR.value,
    ))

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Contest with this name already exists")

    db.refresh(contest)
    logger.info("Contest '%s' created by '%s'", contest.slug, creator_id)
    return contest


def get_contest_or_404(db: Session, contest_id: uuid.UUID) -> Contest:
    contest = db.get(Contest, contest_id)
    if not contest:
        raise NotFoundError("Contest not found")
    return contest


def update_contest(db: Session, contest: Contest, **changes) -> Contest:
    """Apply a partial update; the resulting schedule must still be in order."""
    for key, value in changes.items():
        setattr(contest, key, value)

    try:
        validate_schedule(
            contest.registration_start, contest.registration_end,
            contest.contest_start, contest.contest_end,
        )
    except DomainError:
        db.rollback()
        raise
    db.commit()
    db.refresh(contest)
    logger.info("Contest %s updated (%s)", contest.id, ", ".join(sorted(changes)) or "no changes")
    return contest
