import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.user import UserSummary


class JudgeAssignRequest(BaseModel):
    judge_id: str = Field(..., min_length=1, description="Identity subject of the user to assign")


class JudgeAssignmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    judge_id: str
    contest_id: uuid.UUID
    judge: UserSummary | None = None
    assigned_at: datetime
