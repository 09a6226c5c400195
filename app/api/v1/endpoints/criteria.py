import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from app.core.auth import require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission
from app.models.category import ContestCategory
from app.models.judging import JudgingCriteria, JudgingScore
from app.models.user import User
from app.schemas.criteria import CriteriaCreate, CriteriaResponse, CriteriaUpdate
from app.services.contests import get_contest_or_404
from app.services.scoring import get_criteria_in_contest

logger = logging.getLogger(__name__)
router = APIRouter()


def _check_category(db: Session, contest_id: uuid.UUID, category_id: uuid.UUID) -> None:
    category = (
        db.query(ContestCategory.id)
        .filter(ContestCategory.id == category_id, ContestCategory.contest_id == contest_id)
        .first()
    )
    if not category:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid category")


@router.get(
    "/contests/{contest_id}/criteria",
    response_model=list[CriteriaResponse],
    summary="List judging criteria",
)
def list_criteria(
    contest_id: uuid.UUID,
    category_id: uuid.UUID | None = Query(None, description="Only criteria of this category"),
    db: Session = Depends(get_db),
) -> list[JudgingCriteria]:
    get_contest_or_404(db, contest_id)
    query = db.query(JudgingCriteria)
    if category_id:
        query = query.filter(JudgingCriteria.category_id == category_id)
    else:
        category_ids = select(ContestCategory.id).where(ContestCategory.contest_id == contest_id)
        query = query.filter(or_(
            JudgingCriteria.contest_id == contest_id,
            JudgingCriteria.category_id.in_(category_ids),
        ))
    return query.order_by(JudgingCriteria.order).all()


@router.post(
    "/contests/{contest_id}/criteria",
    response_model=CriteriaResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a judging criterion",
)
def create_criteria(
    contest_id: uuid.UUID,
    data: CriteriaCreate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> JudgingCriteria:
    get_contest_or_404(db, contest_id)
    values = data.model_dump()
    if data.category_id:
        _check_category(db, contest_id, data.category_id)
    else:
        values["contest_id"] = contest_id

    criteria = JudgingCriteria(**values)
    db.add(criteria)
    db.commit()
    db.refresh(criteria)

    logger.info("Criteria '%s' added to contest %s", criteria.name, contest_id)
    return criteria


@router.get(
    "/contests/{contest_id}/criteria/{criteria_id}",
    response_model=CriteriaResponse,
    summary="Get criterion details",
)
def get_criteria(
    contest_id: uuid.UUID,
    criteria_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> JudgingCriteria:
    return get_criteria_in_contest(db, contest_id, criteria_id)


@router.put(
    "/contests/{contest_id}/criteria/{criteria_id}",
    response_model=CriteriaResponse,
    summary="Update criterion",
)
def update_criteria(
    contest_id: uuid.UUID,
    criteria_id: uuid.UUID,
    data: CriteriaUpdate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> JudgingCriteria:
    criteria = get_criteria_in_contest(db, contest_id, criteria_id)
    values = data.model_dump(exclude_unset=True)
    if "category_id" in values:
        if values["category_id"] is None:
            values["contest_id"] = contest_id
        else:
            _check_category(db, contest_id, values["category_id"])
            values["contest_id"] = None

    for key, value in values.items():
        setattr(criteria, key, value)
    db.commit()
    db.refresh(criteria)
    return criteria


@router.delete(
    "/contests/{contest_id}/criteria/{criteria_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete criterion",
)
def delete_criteria(
    contest_id: uuid.UUID,
    criteria_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> None:
    criteria = get_criteria_in_contest(db, contest_id, criteria_id)
    if db.query(JudgingScore.id).filter(JudgingScore.criteria_id == criteria.id).first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete criteria with scores",
        )
    db.delete(criteria)
    db.commit()
    logger.info("Criteria %s deleted from contest %s", criteria_id, contest_id)
