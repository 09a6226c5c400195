import logging
import math
import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from app.core.auth import get_current_user, require_contest_permission
from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import Permission, get_user_permissions
from app.models.contest import Contest, ContestStatus, ContestType
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission
from app.models.user import User
from app.schemas.contest import (
    ContestCreate,
    ContestListResponse,
    ContestPermissionsResponse,
    ContestResponse,
    ContestUpdate,
)
from app.services.contests import create_contest, get_contest_or_404, update_contest

logger = logging.getLogger(__name__)
router = APIRouter()


def _contest_response(db: Session, contest: Contest) -> ContestResponse:
    participant_count = (
        db.query(func.count(ContestParticipation.id))
        .filter(ContestParticipation.contest_id == contest.id)
        .scalar()
    )
    submission_count = (
        db.query(func.count(ContestSubmission.id))
        .join(ContestParticipation, ContestSubmission.participation_id == ContestParticipation.id)
        .filter(ContestParticipation.contest_id == contest.id)
        .scalar()
    )
    return ContestResponse.model_validate(contest).model_copy(update={
        "participant_count": participant_count,
        "submission_count": submission_count,
    })


@router.get(
    "/contests",
    response_model=ContestListResponse,
    summary="List contests",
)
def list_contests(
    type: ContestType | None = Query(None),
    contest_status: ContestStatus | None = Query(None, alias="status"),
    search: str | None = Query(None),
    featured: bool = Query(False),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
) -> dict:
    query = db.query(Contest).options(joinedload(Contest.company))
    if type:
        query = query.filter(Contest.type == type.value)
    if contest_status:
        query = query.filter(Contest.status == contest_status.value)
    if featured:
        query = query.filter(Contest.is_featured.is_(True))
    if search:
        pattern = f"%{search}%"
        query = query.filter(or_(Contest.name.ilike(pattern), Contest.description.ilike(pattern)))

    total = query.count()
    contests = (
        query.order_by(Contest.is_featured.desc(), Contest.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {
        "items": [_contest_response(db, c) for c in contests],
        "total": total,
        "page": page,
        "page_size": page_size,
        "total_pages": math.ceil(total / page_size),
    }


@router.post(
    "/contests",
    response_model=ContestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a contest (caller becomes its administrator)",
)
def create_contest_endpoint(
    data: ContestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestResponse:
    fields = data.model_dump()
    fields["type"] = data.type.value
    contest = create_contest(db, current_user.id, **fields)
    return _contest_response(db, contest)


@router.get(
    "/contests/{contest_id}",
    response_model=ContestResponse,
    summary="Get contest details",
)
def get_contest(
    contest_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> ContestResponse:
    return _contest_response(db, get_contest_or_404(db, contest_id))


@router.put(
    "/contests/{contest_id}",
    response_model=ContestResponse,
    summary="Update contest",
)
def update_contest_endpoint(
    contest_id: uuid.UUID,
    data: ContestUpdate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> ContestResponse:
    contest = get_contest_or_404(db, contest_id)
    changes = data.model_dump(exclude_unset=True)
    if changes.get("status") is not None:
        changes["status"] = changes["status"].value
    contest = update_contest(db, contest, **changes)
    return _contest_response(db, contest)


@router.delete(
    "/contests/{contest_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete contest",
)
def delete_contest(
    contest_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> None:
    contest = get_contest_or_404(db, contest_id)
    db.delete(contest)
    db.commit()
    logger.info("Contest %s deleted by '%s'", contest_id, current_user.id)


@router.get(
    "/contests/{contest_id}/permissions",
    response_model=ContestPermissionsResponse,
    summary="Effective permissions of the caller on a contest",
)
def get_my_permissions(
    contest_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    get_contest_or_404(db, contest_id)
    permissions = get_user_permissions(db, current_user.id, contest_id)
    return {
        "contest_id": contest_id,
        "role": permissions.role.value if permissions.role else None,
        "permissions": permissions.as_flags(),
    }
