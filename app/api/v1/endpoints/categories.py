import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.auth import require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission
from app.models.category import ContestCategory
from app.models.contest import PRODUCT_CONTEST_TYPES, ContestType
from app.models.submission import ContestSubmission
from app.models.user import User
from app.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from app.services.contests import get_contest_or_404

logger = logging.getLogger(__name__)
router = APIRouter()

LIVESTOCK_FIELDS = {"age_min", "age_max", "sexo"}
PRODUCT_FIELDS = {"product_type", "weight_min", "weight_max"}


def _fields_for_contest_type(contest_type: str, values: dict) -> dict:
    """Drop the fields that do not apply to this kind of contest."""
    ignored = set()
    if contest_type != ContestType.LIVESTOCK.value:
        ignored |= LIVESTOCK_FIELDS
    if contest_type not in PRODUCT_CONTEST_TYPES:
        ignored |= PRODUCT_FIELDS
    cleaned = {k: v for k, v in values.items() if k not in ignored}
    if cleaned.get("sexo") is not None:
        cleaned["sexo"] = cleaned["sexo"].value
    return cleaned


def _get_category_or_404(db: Session, contest_id: uuid.UUID, category_id: uuid.UUID) -> ContestCategory:
    category = (
        db.query(ContestCategory)
        .filter(ContestCategory.id == category_id, ContestCategory.contest_id == contest_id)
        .first()
    )
    if not category:
        raise HTTPException(status_code=404, detail="Category not found")
    return category


def _submission_count(db: Session, category_id: uuid.UUID) -> int:
    return (
        db.query(func.count(ContestSubmission.id))
        .filter(ContestSubmission.category_id == category_id)
        .scalar()
    )


def _category_response(db: Session, category: ContestCategory) -> CategoryResponse:
    return CategoryResponse.model_validate(category).model_copy(
        update={"submission_count": _submission_count(db, category.id)}
    )


@router.get(
    "/contests/{contest_id}/categories",
    response_model=list[CategoryResponse],
    summary="List contest categories",
)
def list_categories(
    contest_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> list[CategoryResponse]:
    get_contest_or_404(db, contest_id)
    categories = (
        db.query(ContestCategory)
        .filter(ContestCategory.contest_id == contest_id)
        .order_by(ContestCategory.order)
        .all()
    )
    return [_category_response(db, c) for c in categories]


@router.post(
    "/contests/{contest_id}/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
def create_category(
    contest_id: uuid.UUID,
    data: CategoryCreate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CATEGORIES)),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    contest = get_contest_or_404(db, contest_id)
    category = ContestCategory(
        contest_id=contest_id,
        **_fields_for_contest_type(contest.type, data.model_dump()),
    )
    db.add(category)
    db.commit()
    db.refresh(category)

    logger.info("Category '%s' added to contest %s", category.name, contest_id)
    return _category_response(db, category)


@router.get(
    "/contests/{contest_id}/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Get category details",
)
def get_category(
    contest_id: uuid.UUID,
    category_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> CategoryResponse:
    return _category_response(db, _get_category_or_404(db, contest_id, category_id))


@router.put(
    "/contests/{contest_id}/categories/{category_id}",
    response_model=CategoryResponse,
    summary="Update category",
)
def update_category(
    contest_id: uuid.UUID,
    category_id: uuid.UUID,
    data: CategoryUpdate,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CATEGORIES)),
    db: Session = Depends(get_db),
) -> CategoryResponse:
    category = _get_category_or_404(db, contest_id, category_id)
    values = _fields_for_contest_type(category.contest.type, data.model_dump(exclude_unset=True))
    for key, value in values.items():
        setattr(category, key, value)
    db.commit()
    db.refresh(category)
    return _category_response(db, category)


@router.delete(
    "/contests/{contest_id}/categories/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete category",
)
def delete_category(
    contest_id: uuid.UUID,
    category_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CATEGORIES)),
    db: Session = Depends(get_db),
) -> None:
    category = _get_category_or_404(db, contest_id, category_id)
    if _submission_count(db, category.id):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot delete category with submissions",
        )
    db.delete(category)
    db.commit()
    logger.info("Category %s deleted from contest %s", category_id, contest_id)
