import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.company import Company
from app.models.user import User
from app.schemas.company import (
    CompanyCreate,
    CompanyListResponse,
    CompanyResponse,
    CompanyUpdate,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_company_or_404(db: Session, company_id: uuid.UUID) -> Company:
    company = db.get(Company, company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company


def _commit_unique_slug(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A company with this slug already exists",
        )


@router.get(
    "/companies",
    response_model=CompanyListResponse,
    summary="List companies",
)
def list_companies(
    featured: bool | None = Query(None),
    published: bool | None = Query(None),
    db: Session = Depends(get_db),
) -> dict:
    query = db.query(Company)
    if featured is not None:
        query = query.filter(Company.is_featured.is_(featured))
    if published is not None:
        query = query.filter(Company.is_published.is_(published))

    items = query.order_by(Company.nombre).all()
    return {"items": items, "total": len(items)}


@router.post(
    "/companies",
    response_model=CompanyResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a company",
)
def create_company(
    data: CompanyCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Company:
    if db.query(Company.id).filter(Company.slug == data.slug).first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A company with this slug already exists",
        )

    company = Company(**data.model_dump())
    db.add(company)
    _commit_unique_slug(db)
    db.refresh(company)

    logger.info("Company '%s' created by '%s'", company.slug, current_user.id)
    return company


@router.get(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    summary="Get company details",
)
def get_company(
    company_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> Company:
    return _get_company_or_404(db, company_id)


@router.put(
    "/companies/{company_id}",
    response_model=CompanyResponse,
    summary="Update company",
)
def update_company(
    company_id: uuid.UUID,
    data: CompanyUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Company:
    company = _get_company_or_404(db, company_id)
    for key, value in data.model_dump(exclude_unset=True).items():
        setattr(company, key, value)
    _commit_unique_slug(db)
    db.refresh(company)
    return company


@router.delete(
    "/companies/{company_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete company and its contests",
)
def delete_company(
    company_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    company = _get_company_or_404(db, company_id)
    db.delete(company)
    db.commit()
    logger.info("Company %s deleted by '%s'", company_id, current_user.id)
