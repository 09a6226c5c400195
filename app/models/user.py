from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class User(Base):
    """A person known to the identity provider; `id` is the token subject."""

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    nombre: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True, index=True)
    activo: Mapped[bool] = mapped_column(Boolean, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    contest_roles: Mapped[list["ContestUserRole"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )
    participations: Mapped[list["ContestParticipation"]] = relationship(  # noqa: F821
        back_populates="user", cascade="all, delete-orphan"
    )
