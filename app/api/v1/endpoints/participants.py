import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from app.core.auth import get_current_user, require_contest_permission
from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import Permission, has_permission
from app.models.participation import ContestParticipation, ParticipationStatus
from app.models.user import User
from app.schemas.participation import (
    ParticipationListResponse,
    ParticipationResponse,
    ParticipationUpdate,
)
from app.services.contests import get_contest_or_404
from app.services.registration import (
    register_participant,
    update_participation,
    withdraw_participation,
)

router = APIRouter()


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


def _get_participation_or_404(
    db: Session, contest_id: uuid.UUID, participation_id: uuid.UUID
) -> ContestParticipation:
    participation = (
        db.query(ContestParticipation)
        .filter(
            ContestParticipation.id == participation_id,
            ContestParticipation.contest_id == contest_id,
        )
        .first()
    )
    if not participation:
        raise HTTPException(status_code=404, detail="Participation not found")
    return participation


def _owner_or_manager(db: Session, user: User, participation: ContestParticipation) -> None:
    if participation.user_id == user.id:
        return
    if not has_permission(db, user.id, participation.contest_id, Permission.MANAGE_CONTEST):
        raise _forbidden()


@router.get(
    "/contests/{contest_id}/participants",
    response_model=ParticipationListResponse,
    summary="List contest participants",
)
def list_participants(
    contest_id: uuid.UUID,
    participation_status: ParticipationStatus | None = Query(None, alias="status"),
    search: str | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    if settings.PARTICIPANTS_LIST_REQUIRES_MANAGE and not has_permission(
        db, current_user.id, contest_id, Permission.MANAGE_CONTEST
    ):
        raise _forbidden()

    query = (
        db.query(ContestParticipation)
        .options(joinedload(ContestParticipation.user))
        .filter(ContestParticipation.contest_id == contest_id)
    )
    if participation_status:
        query = query.filter(ContestParticipation.status == participation_status.value)
    if search:
        pattern = f"%{search}%"
        query = query.join(User, ContestParticipation.user_id == User.id).filter(
            or_(User.nombre.ilike(pattern), User.email.ilike(pattern))
        )

    total = query.count()
    items = (
        query.order_by(ContestParticipation.registered_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.post(
    "/contests/{contest_id}/participants",
    response_model=ParticipationResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register the caller for a contest",
)
def register(
    contest_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestParticipation:
    return register_participant(db, contest_id, current_user.id)


@router.get(
    "/contests/{contest_id}/participants/{participation_id}",
    response_model=ParticipationResponse,
    summary="Get a participation",
)
def get_participation(
    contest_id: uuid.UUID,
    participation_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestParticipation:
    participation = _get_participation_or_404(db, contest_id, participation_id)
    _owner_or_manager(db, current_user, participation)
    return participation


@router.put(
    "/contests/{contest_id}/participants/{participation_id}",
    response_model=ParticipationResponse,
    summary="Approve, reject or annotate a participation",
)
def update_participation_endpoint(
    contest_id: uuid.UUID,
    participation_id: uuid.UUID,
    data: ParticipationUpdate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> ContestParticipation:
    participation = _get_participation_or_404(db, contest_id, participation_id)
    return update_participation(db, participation, data.status, data.notes)


@router.delete(
    "/contests/{contest_id}/participants/{participation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Withdraw a participation",
)
def delete_participation(
    contest_id: uuid.UUID,
    participation_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    get_contest_or_404(db, contest_id)
    participation = _get_participation_or_404(db, contest_id, participation_id)
    _owner_or_manager(db, current_user, participation)
    is_manager = has_permission(db, current_user.id, contest_id, Permission.MANAGE_CONTEST)
    withdraw_participation(db, participation, is_manager)
