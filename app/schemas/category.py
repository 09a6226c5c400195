import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.ganado import Sexo


class CategoryCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    order: int = 0
    # Livestock
    age_min: int | None = Field(None, ge=0)
    age_max: int | None = Field(None, ge=0)
    sexo: Sexo | None = None
    # Products
    product_type: str | None = None
    weight_min: float | None = Field(None, ge=0)
    weight_max: float | None = Field(None, ge=0)
    max_entries: int | None = Field(None, ge=1)


class CategoryUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    order: int | None = None
    age_min: int | None = Field(None, ge=0)
    age_max: int | None = Field(None, ge=0)
    sexo: Sexo | None = None
    product_type: str | None = None
    weight_min: float | None = Field(None, ge=0)
    weight_max: float | None = Field(None, ge=0)
    max_entries: int | None = Field(None, ge=1)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    contest_id: uuid.UUID
    name: str
    description: str | None = None
    order: int
    age_min: int | None = None
    age_max: int | None = None
    sexo: str | None = None
    product_type: str | None = None
    weight_min: float | None = None
    weight_max: float | None = None
    max_entries: int | None = None
    submission_count: int = 0
    created_at: datetime
