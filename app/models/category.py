import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class ContestCategory(Base):
    __tablename__ = "contest_categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    contest_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contests.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    order: Mapped[int] = mapped_column(Integer, default=0)
    # Livestock contests
    age_min: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="Days")
    age_max: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="Days")
    sexo: Mapped[str | None] = mapped_column(String(10), nullable=True)
    # Product contests
    product_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    weight_min: Mapped[float | None] = mapped_column(Float, nullable=True)
    weight_max: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_entries: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    contest: Mapped["Contest"] = relationship(back_populates="categories")  # noqa: F821
    criteria: Mapped[list["JudgingCriteria"]] = relationship(  # noqa: F821
        back_populates="category", cascade="all, delete-orphan"
    )
