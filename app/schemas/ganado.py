import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.ganado import Sexo


class GanadoCreate(BaseModel):
    nombre: str = Field(..., min_length=1, max_length=255)
    slug: str = Field(..., min_length=1, max_length=255)
    sexo: Sexo
    criador_id: uuid.UUID | None = None
    raza: str | None = None
    num_registro: str | None = None
    fecha_nac: datetime | None = None
    establo: str | None = None
    propietario: str | None = None
    remate: bool = False
    puntaje: float | None = None
    descripcion: str | None = None
    is_featured: bool = False
    is_published: bool = False


class GanadoUpdate(BaseModel):
    nombre: str | None = Field(None, min_length=1, max_length=255)
    slug: str | None = Field(None, min_length=1, max_length=255)
    sexo: Sexo | None = None
    criador_id: uuid.UUID | None = None
    raza: str | None = None
    num_registro: str | None = None
    fecha_nac: datetime | None = None
    establo: str | None = None
    propietario: str | None = None
    remate: bool | None = None
    puntaje: float | None = None
    descripcion: str | None = None
    is_featured: bool | None = None
    is_published: bool | None = None


class GanadoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    nombre: str
    slug: str
    sexo: str
    criador_id: uuid.UUID | None = None
    raza: str | None = None
    num_registro: str | None = None
    fecha_nac: datetime | None = None
    establo: str | None = None
    propietario: str | None = None
    remate: bool
    puntaje: float | None = None
    descripcion: str | None = None
    is_featured: bool
    is_published: bool
    created_at: datetime
    updated_at: datetime


class GanadoListResponse(BaseModel):
    items: list[GanadoResponse]
    total: int
    page: int
    page_size: int
