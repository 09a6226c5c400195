"""
Contest models.

Entity hierarchy (all per contest_id):
  Contest → ContestCategory → JudgingCriteria (category level)
  Contest → JudgingCriteria (contest level)
  Contest → ContestParticipation → ContestSubmission → SubmissionMedia, JudgingScore
  Contest → ContestUserRole, JudgingAssignment
"""

import enum
import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class ContestType(str, enum.Enum):
    LIVESTOCK = "LIVESTOCK"
    COFFEE_PRODUCTS = "COFFEE_PRODUCTS"
    GENERAL_PRODUCTS = "GENERAL_PRODUCTS"


PRODUCT_CONTEST_TYPES = {ContestType.COFFEE_PRODUCTS.value, ContestType.GENERAL_PRODUCTS.value}


class ContestStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    REGISTRATION_OPEN = "REGISTRATION_OPEN"
    REGISTRATION_CLOSED = "REGISTRATION_CLOSED"
    JUDGING = "JUDGING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class Contest(Base):
    __tablename__ = "contests"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    company_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("companies.id", ondelete="CASCADE"), index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(String(30), nullable=False)
    status: Mapped[str] = mapped_column(String(30), default=ContestStatus.DRAFT.value, index=True)
    # Windows
    registration_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    registration_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    contest_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    contest_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    results_published: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    # Limits
    max_participants: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="NULL = no cap")
    entry_fee: Mapped[float] = mapped_column(Float, default=0)
    rules: Mapped[str | None] = mapped_column(Text, nullable=True)
    prizes: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    is_featured: Mapped[bool] = mapped_column(Boolean, default=False)
    banner_image: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    company: Mapped["Company"] = relationship(back_populates="contests")  # noqa: F821
    categories: Mapped[list["ContestCategory"]] = relationship(  # noqa: F821
        back_populates="contest", cascade="all, delete-orphan", order_by="ContestCategory.order"
    )
    criteria: Mapped[list["JudgingCriteria"]] = relationship(  # noqa: F821
        back_populates="contest", cascade="all, delete-orphan"
    )
    participations: Mapped[list["ContestParticipation"]] = relationship(  # noqa: F821
        back_populates="contest", cascade="all, delete-orphan"
    )
    user_roles: Mapped[list["ContestUserRole"]] = relationship(  # noqa: F821
        back_populates="contest", cascade="all, delete-orphan"
    )
    judging_assignments: Mapped[list["JudgingAssignment"]] = relationship(  # noqa: F821
        back_populates="contest", cascade="all, delete-orphan"
    )
