import uuid

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, selectinload

from app.core.auth import get_current_user
from app.core.config import settings
from app.core.database import get_db
from app.core.permissions import Permission, get_user_permissions
from app.models.participation import ContestParticipation
from app.models.submission import ContestSubmission, SubmissionStatus
from app.models.user import User
from app.schemas.submission import (
    SubmissionCreate,
    SubmissionListResponse,
    SubmissionResponse,
    SubmissionUpdate,
)
from app.services.contests import get_contest_or_404
from app.services.scoring import get_submission_in_contest
from app.services.submissions import create_submission, delete_submission, update_submission

router = APIRouter()


def _forbidden() -> HTTPException:
    return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")


@router.get(
    "/contests/{contest_id}/submissions",
    response_model=SubmissionListResponse,
    summary="List submissions (own only unless manager or judge)",
)
def list_submissions(
    contest_id: uuid.UUID,
    category_id: uuid.UUID | None = Query(None),
    submission_status: SubmissionStatus | None = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> dict:
    get_contest_or_404(db, contest_id)
    permissions = get_user_permissions(db, current_user.id, contest_id)

    query = (
        db.query(ContestSubmission)
        .join(ContestParticipation, ContestSubmission.participation_id == ContestParticipation.id)
        .options(selectinload(ContestSubmission.media))
        .filter(ContestParticipation.contest_id == contest_id)
    )
    if not (permissions.allows(Permission.MANAGE_SUBMISSIONS) or permissions.allows(Permission.JUDGE)):
        query = query.filter(ContestParticipation.user_id == current_user.id)
    if category_id:
        query = query.filter(ContestSubmission.category_id == category_id)
    if submission_status:
        query = query.filter(ContestSubmission.status == submission_status.value)

    total = query.count()
    items = (
        query.order_by(ContestSubmission.created_at.desc())
        .offset((page - 1) * page_size)
        .limit(page_size)
        .all()
    )
    return {"items": items, "total": total, "page": page, "page_size": page_size}


@router.post(
    "/contests/{contest_id}/submissions",
    response_model=SubmissionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enter a submission",
)
def create_submission_endpoint(
    contest_id: uuid.UUID,
    data: SubmissionCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestSubmission:
    get_contest_or_404(db, contest_id)
    return create_submission(db, contest_id, current_user.id, **data.model_dump())


@router.get(
    "/contests/{contest_id}/submissions/{submission_id}",
    response_model=SubmissionResponse,
    summary="Get a submission",
)
def get_submission(
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestSubmission:
    submission = get_submission_in_contest(db, contest_id, submission_id)
    permissions = get_user_permissions(db, current_user.id, contest_id)
    is_owner = submission.participation.user_id == current_user.id
    if not (
        is_owner
        or permissions.allows(Permission.JUDGE)
        or permissions.allows(Permission.MANAGE_SUBMISSIONS)
    ):
        raise _forbidden()
    return submission


@router.put(
    "/contests/{contest_id}/submissions/{submission_id}",
    response_model=SubmissionResponse,
    summary="Update a submission",
)
def update_submission_endpoint(
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    data: SubmissionUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> ContestSubmission:
    submission = get_submission_in_contest(db, contest_id, submission_id)
    is_manager = get_user_permissions(db, current_user.id, contest_id).allows(
        Permission.MANAGE_SUBMISSIONS
    )
    if submission.participation.user_id != current_user.id and not is_manager:
        raise _forbidden()
    return update_submission(db, submission, data.model_dump(exclude_unset=True), is_manager)


@router.delete(
    "/contests/{contest_id}/submissions/{submission_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a submission",
)
def delete_submission_endpoint(
    contest_id: uuid.UUID,
    submission_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
) -> None:
    submission = get_submission_in_contest(db, contest_id, submission_id)
    is_manager = get_user_permissions(db, current_user.id, contest_id).allows(
        Permission.MANAGE_SUBMISSIONS
    )
    if submission.participation.user_id != current_user.id and not is_manager:
        raise _forbidden()
    delete_submission(db, submission, is_manager)
