import uuid

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission
from app.models.judging import JudgingAssignment
from app.models.user import User
from app.schemas.judge import JudgeAssignmentResponse, JudgeAssignRequest
from app.services.contests import get_contest_or_404
from app.services.judges import assign_judge, list_judges, remove_judge

router = APIRouter()


@router.get(
    "/contests/{contest_id}/judges",
    response_model=list[JudgeAssignmentResponse],
    summary="List judges assigned to a contest",
)
def get_judges(
    contest_id: uuid.UUID,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> list[JudgingAssignment]:
    get_contest_or_404(db, contest_id)
    return list_judges(db, contest_id)


@router.post(
    "/contests/{contest_id}/judges",
    response_model=JudgeAssignmentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Assign a judge to a contest",
)
def add_judge(
    contest_id: uuid.UUID,
    body: JudgeAssignRequest,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> JudgingAssignment:
    return assign_judge(db, contest_id, body.judge_id)


@router.delete(
    "/contests/{contest_id}/judges/{judge_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove a judge who has not scored yet",
)
def delete_judge(
    contest_id: uuid.UUID,
    judge_id: str,
    current_user: User = Depends(require_contest_permission(Permission.MANAGE_CONTEST)),
    db: Session = Depends(get_db),
) -> None:
    remove_judge(db, contest_id, judge_id)
