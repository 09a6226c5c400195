import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CompanyCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    descripcion: str | None = None
    logo: str | None = None
    is_featured: bool = False
    is_published: bool = False


class CompanyUpdate(BaseModel):
    nombre: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    descripcion: str | None = None
    logo: str | None = None
    is_featured: bool | None = None
    is_published: bool | None = None


class CompanyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    nombre: str
    slug: str
    descripcion: str | None = None
    logo: str | None = None
    is_featured: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime


class CompanySummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    nombre: str
    slug: str


class CompanyListResponse(BaseModel):
    items: list[CompanyResponse]
    total: int
