import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict

from app.models.participation import ParticipationStatus
from app.schemas.user import UserSummary


class ParticipationUpdate(BaseModel):
    status: ParticipationStatus
    notes: str | None = None


class ParticipationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    user_id: str
    contest_id: uuid.UUID
    user: UserSummary | None = None
    status: str
    notes: str | None = None
    registered_at: datetime
    approved_at: datetime | None = None


class ParticipationListResponse(BaseModel):
    items: list[ParticipationResponse]
    total: int
    page: int
    page_size: int
