import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CriteriaCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    weight: float = Field(1.0, ge=0)
    max_score: float = Field(100, gt=0)
    order: int = 0
    category_id: uuid.UUID | None = Field(
        None, description="Attach to one category instead of the whole contest"
    )


class CriteriaUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    weight: float | None = Field(None, ge=0)
    max_score: float | None = Field(None, gt=0)
    order: int | None = None
    category_id: uuid.UUID | None = None


class CriteriaResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    contest_id: uuid.UUID | None = None
    category_id: uuid.UUID | None = None
    name: str
    description: str | None = None
    weight: float
    max_score: float
    order: int
    created_at: datetime
