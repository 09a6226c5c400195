import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class CriadorCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    apellido: str | None = None
    empresa: str | None = None
    telefono: str | None = None
    email: str | None = None
    direccion: str | None = None


class CriadorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    nombre: str
    apellido: str | None = None
    empresa: str | None = None
    telefono: str | None = None
    email: str | None = None
    direccion: str | None = None
    created_at: datetime


class CriadorListResponse(BaseModel):
    items: list[CriadorResponse]
    total: int
