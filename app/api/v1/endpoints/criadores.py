from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.models.criador import Criador
from app.models.user import User
from app.schemas.criador import CriadorCreate, CriadorListResponse, CriadorResponse

router = APIRouter()


@router.get(
    "/criadores",
    response_model=CriadorListResponse,
    summary="List breeders",
)
def list_criadores(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    items = db.query(Criador).order_by(Criador.nombre).all()
    return {"items": items, "total": len(items)}


@router.post(
    "/criadores",
    response_model=CriadorResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a breeder",
)
def create_criador(
    data: CriadorCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> Criador:
    criador = Criador(**data.model_dump())
    db.add(criador)
    db.commit()
    db.refresh(criador)
    return criador
