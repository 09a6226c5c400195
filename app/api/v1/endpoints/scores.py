import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user, require_contest_permission
from app.core.database import get_db
from app.core.permissions import Permission, get_user_permissions
from app.models.judging import JudgingScore
from app.models.user import User
from app.schemas.score import ScoreCreate, ScoreResponse
from app.services.scoring import get_submission_in_contest, list_scores, record_score

router = APIRouter()


@router.get(
    "/contests/{contest_id}/submissions/{submission_id}/scores",
    response_model=list[ScoreResponse],
    summary="List the scores of a submission",
)
def get_scores(
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> list[JudgingScore]:
    submission = get_submission_in_contest(db, contest_id, submission_id)
    permissions = get_user_permissions(db, current_user.id, contest_id)
    if not (
        submission.participation.user_id == current_user.id
        or permissions.allows(Permission.JUDGE)
        or permissions.allows(Permission.MANAGE_SUBMISSIONS)
    ):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")
    return list_scores(db, submission.id)


@router.post(
    "/contests/{contest_id}/submissions/{submission_id}/scores",
    response_model=ScoreResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Score a submission on one criterion",
)
def create_score(
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    data: ScoreCreate,
    current_user: User = Depends(require_contest_permission(Permission.JUDGE)),
    db: Session = Depends(get_db),
) -> JudgingScore:
    return record_score(
        db,
        contest_id=contest_id,
        submission_id=submission_id,
        judge_id=current_user.id,
        criteria_id=data.criteria_id,
        score=data.score,
        comments=data.comments,
    )
