import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.models.criador import Criador
from app.models.ganado import Ganado, Sexo
from app.models.user import User
from app.schemas.ganado import GanadoCreate, GanadoListResponse, GanadoResponse, GanadoUpdate

logger = logging.getLogger(__name__)
router = APIRouter()


def _get_ganado_or_404(db: Session, ganado_id: uuid.UUID) -> Ganado:
    ganado = db.get(Ganado, ganado_id)
    if not ganado:
        raise HTTPException(status_code=404, detail="Ganado not found")
    return ganado


def _apply(db: Session, ganado: Ganado, values: dict) -> None:
    if values.get("criador_id") and db.get(Criador, values["criador_id"]) is None:
        raise HTTPException(status_code=404, detail="Criador not found")
    if isinstance(values.get("sexo"), Sexo):
        values["sexo"] = values["sexo"].value
    for key, value in values.items():
        setattr(ganado, key, value)
    db.add(ganado)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ganado with this slug already exists",
        )


@router.get(
    "/ganado",
    response_model=GanadoListResponse,
    summary="List livestock",
)
def list_ganado(
    sexo: Sexo | None = Query(None),
    raza: str | None = Query(None),
    criador_id: uuid.UUID | None = Query(None),
    featured: bool | None = Query(None),
    published: bool | None = Query(None),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    db: Session = Depends(get_db),
) -> dict:
    query = db.query(Ganado)
    if sexo:
        query = query.filter(Ganado.sexo == sexo.value)
    if raza:
        query = query.filter(Ganado.raza.ilike(f"%{raza}%"))
    if criador_id:
        query = query.filter(Ganado.criador_id == criador_id)
    if featured is not None:
        query = query.filter(Ganado.is_featured.is_(featured))
    if published is not None:
        query = query.filter(Ganado.is_published.is_(published))

    total = query.count()
    items = (
        query.order_by(Ganado.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.post(
    "/ganado",
    response_model=GanadoResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register an animal",
)
def create_ganado(
    data: GanadoCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Ganado:
    ganado = Ganado()
    _apply(db, ganado, data.model_dump())
    db.refresh(ganado)

    logger.info("Ganado '%s' created by '%s'", ganado.slug, current_user.id)
    return ganado


@router.get(
    "/ganado/{ganado_id}",
    response_model=GanadoResponse,
    summary="Get animal details",
)
def get_ganado(
    ganado_id: uuid.UUID,
    db: Session = Depends(get_db),
) -> Ganado:
    return _get_ganado_or_404(db, ganado_id)


@router.put(
    "/ganado/{ganado_id}",
    response_model=GanadoResponse,
    summary="Update animal",
)
def update_ganado(
    ganado_id: uuid.UUID,
    data: GanadoUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Ganado:
    ganado = _get_ganado_or_404(db, ganado_id)
    _apply(db, ganado, data.model_dump(exclude_unset=True))
    db.refresh(ganado)
    return ganado


@router.delete(
    "/ganado/{ganado_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete animal",
)
def delete_ganado(
    ganado_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    ganado = _get_ganado_or_404(db, ganado_id)
    db.delete(ganado)
    db.commit()
    logger.info("Ganado %s deleted by '%s'", ganado_id, current_user.id)
