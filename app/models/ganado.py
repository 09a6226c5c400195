import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class Sexo(str, enum.Enum):
    MACHO = "MACHO"
    HEMBRA = "HEMBRA"


class Ganado(Base):
    __tablename__ = "ganado"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    criador_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("criadores.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    sexo: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    raza: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    num_registro: Mapped[str | None] = mapped_column(String(100), nullable=True)
    fecha_nac: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    establo: Mapped[str | None] = mapped_column(String(255), nullable=True)
    propietario: Mapped[str | None] = mapped_column(String(255), nullable=True)
    remate: Mapped[bool] = mapped_column(Boolean, default=False, comment="Offered at auction")
    puntaje: Mapped[float | None] = mapped_column(Float, nullable=True)
    descripcion: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    is_published: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    criador: Mapped["Criador | None"] = relationship(back_populates="ganado")  # noqa: F821
