import io
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from openpyxl import Workbook
from sqlalchemy.orm import Session

from app.core.auth import get_optional_user, require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission, has_permission
from app.models.contest import Contest
from app.models.user import User
from app.schemas.contest import ContestResponse
from app.schemas.results import ResultsResponse
from app.services.contests import get_contest_or_404
from app.services.results import compute_results, publish_results, results_are_public

logger = logging.getLogger(__name__)
router = APIRouter()


def _visible_contest(db: Session, contest_id: uuid.UUID, user: User | None) -> Contest:
    contest = get_contest_or_404(db, contest_id)
    if results_are_public(contest):
        return contest
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Results not yet published",
        )
    if not has_permission(db, user.id, contest_id, Permission.VIEW_RESULTS):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return contest


@router.get(
    "/contests/{contest_id}/results",
    response_model=ResultsResponse,
    summary="Ranked results per category",
)
def get_results(
    contest_id: uuid.UUID,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> dict:
    _visible_contest(db, contest_id, current_user)
    return compute_results(db, contest_id)


@router.get(
    "/contests/{contest_id}/results/export",
    summary="Download the results table as Excel",
)
def export_results(
    contest_id: uuid.UUID,
    current_user: User | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
) -> StreamingResponse:
    contest = _visible_contest(db, contest_id, current_user)
    results = compute_results(db, contest_id)

    wb = Workbook()
    ws = wb.active
    ws.title = "Resultados"
    ws.append(["Categoría", "Posición", "Título", "Participante", "Puntaje total"])
    for category in results["categories"]:
        for position, entry in enumerate(category["submissions"], start=1):
            ws.append([
                category["category_name"],
                position,
                entry["title"],
                entry["participant_name"] or entry["participant_id"],
                round(entry["total_score"], 2),
            ])

    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)

    filename = f"resultados_{contest.slug}.xlsx"
    return StreamingResponse(
        buf,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post(
    "/contests/{contest_id}/results",
    response_model=ContestResponse,
    summary="Publish results and complete the contest",
)
def publish(
    contest_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> ContestResponse:
    contest = publish_results(db, get_contest_or_404(db, contest_id))
    logger.info("Results of contest %s published by '%s'", contest_id, current_user.id)
    return ContestResponse.model_validate(contest)
