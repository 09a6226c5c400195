import uuid
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.models.submission import SubmissionStatus


class SubmissionCreate(BaseModel):
    category_id: uuid.UUID
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    ganado_id: uuid.UUID | None = None
    metadata: dict[str, Any] | None = None


class SubmissionUpdate(BaseModel):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    ganado_id: uuid.UUID | None = None
    metadata: dict[str, Any] | None = None
    status: SubmissionStatus | None = None


class SubmissionMediaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    type: str
    url: str
    filename: str
    mime_type: str | None = None
    size: int | None = None
    is_primary: bool
    caption: str | None = None


class SubmissionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    participation_id: uuid.UUID
    category_id: uuid.UUID
    ganado_id: uuid.UUID | None = None
    title: str
    description: str | None = None
    status: str
    metadata: dict[str, Any] | None = Field(None, validation_alias="metadata_")
    submitted_at: datetime | None = None
    media: list[SubmissionMediaResponse] = []
    created_at: datetime
    updated_at: datetime


class SubmissionListResponse(BaseModel):
    items: list[SubmissionResponse]
    total: int
    page: int
    page_size: int
