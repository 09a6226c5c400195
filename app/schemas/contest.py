import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.contest import ContestStatus, ContestType
from app.schemas.company import CompanySummary


class ContestCreate(BaseModel):
    company_id: uuid.UUID
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    type: ContestType
    registration_start: datetime
    registration_end: datetime
    contest_start: datetime
    contest_end: datetime
    max_participants: int | None = Field(None, ge=1)
    entry_fee: float = Field(0, ge=0)
    rules: str | None = None
    prizes: str | None = None
    is_public: bool = True
    is_featured: bool = False
    banner_image: str | None = None


class ContestUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    status: ContestStatus | None = None
    registration_start: datetime | None = None
    registration_end: datetime | None = None
    contest_start: datetime | None = None
    contest_end: datetime | None = None
    max_participants: int | None = Field(None, ge=1)
    entry_fee: float | None = Field(None, ge=0)
    rules: str | None = None
    prizes: str | None = None
    is_public: bool | None = None
    is_featured: bool | None = None
    banner_image: str | None = None


class ContestResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    company_id: uuid.UUID
    company: CompanySummary | None = None
    name: str
    slug: str
    description: str | None = None
    type: str
    status: str
    registration_start: datetime
    registration_end: datetime
    contest_start: datetime
    contest_end: datetime
    results_published: datetime | None = None
    max_participants: int | None = None
    entry_fee: float
    rules: str | None = None
    prizes: str | None = None
    is_public: bool
    is_featured: bool
    banner_image: str | None = None
    participant_count: int = 0
    submission_count: int = 0
    created_at: datetime
    updated_at: datetime


class ContestListResponse(BaseModel):
    items: list[ContestResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class ContestPermissionsResponse(BaseModel):
    contest_id: uuid.UUID
    role: str | None = None
    permissions: dict[str, bool]
