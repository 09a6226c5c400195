import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission
from app.models.user import User
from app.schemas.stats import ContestStatsResponse
from app.services.contests import get_contest_or_404
from app.services.stats import contest_stats

router = APIRouter()


@router.get(
    "/contests/{contest_id}/stats",
    response_model=ContestStatsResponse,
    summary="Contest dashboard statistics",
)
def get_stats(
    contest_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> dict:
    get_contest_or_404(db, contest_id)
    return contest_stats(db, contest_id)
