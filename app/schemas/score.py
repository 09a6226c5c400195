import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.schemas.criteria import CriteriaResponse
from app.schemas.user import UserSummary


class ScoreCreate(BaseModel):
    criteria_id: uuid.UUID
    score: float
    comments: str | None = None


class ScoreResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    judge_id: str
    submission_id: uuid.UUID
    criteria_id: uuid.UUID
    score: float
    comments: str | None = None
    judge: UserSummary | None = None
    criteria: CriteriaResponse | None = None
    scored_at: datetime
