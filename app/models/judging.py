import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint, DateTime, Float, ForeignKey, Integer, String, Text,
    UniqueConstraint, func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class JudgingAssignment(Base):
    """Binds a user acting as judge to a contest."""

    __tablename__ = "judging_assignments"
    __table_args__ = (
        UniqueConstraint("judge_id", "contest_id", name="uq_judging_assignment"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    judge_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    contest_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contests.id", ondelete="CASCADE"), index=True
    )
    assigned_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    judge: Mapped["User"] = relationship()  # noqa: F821
    contest: Mapped["Contest"] = relationship(back_populates="judging_assignments")  # noqa: F821


class JudgingCriteria(Base):
    """Scoring criterion, attached either to a whole contest or to one category."""

    __tablename__ = "judging_criteria"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    contest_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contests.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    category_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contest_categories.id", ondelete="CASCADE"),
        nullable=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    weight: Mapped[float] = mapped_column(Float, default=1.0)
    max_score: Mapped[float] = mapped_column(Float, default=100)
    order: Mapped[int] = mapped_column(Integer, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    contest: Mapped["Contest | None"] = relationship(back_populates="criteria")  # noqa: F821
    category: Mapped["ContestCategory | None"] = relationship(back_populates="criteria")  # noqa: F821


class JudgingScore(Base):
    __tablename__ = "judging_scores"
    __table_args__ = (
        UniqueConstraint("judge_id", "submission_id", "criteria_id", name="uq_judging_score"),
        CheckConstraint("score >= 0", name="ck_judging_score_positive"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    judge_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    submission_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contest_submissions.id", ondelete="CASCADE"), index=True
    )
    criteria_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("judging_criteria.id", ondelete="CASCADE"), index=True
    )
    score: Mapped[float] = mapped_column(Float, nullable=False)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    scored_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    judge: Mapped["User"] = relationship()  # noqa: F821
    submission: Mapped["ContestSubmission"] = relationship(back_populates="scores")  # noqa: F821
    criteria: Mapped["JudgingCriteria"] = relationship()
