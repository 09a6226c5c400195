import enum
import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class SubmissionStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"
    UNDER_REVIEW = "UNDER_REVIEW"
    JUDGED = "JUDGED"
    DISQUALIFIED = "DISQUALIFIED"


# Statuses only a submissions manager may move an entry into
MANAGER_ONLY_STATUSES = {
    SubmissionStatus.UNDER_REVIEW.value,
    SubmissionStatus.JUDGED.value,
    SubmissionStatus.DISQUALIFIED.value,
}


class ContestSubmission(Base):
    __tablename__ = "contest_submissions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    participation_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contest_participations.id", ondelete="CASCADE"), index=True
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contest_categories.id", ondelete="CASCADE"), index=True
    )
    ganado_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ganado.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), default=SubmissionStatus.DRAFT.value, index=True
    )
    metadata_: Mapped[dict | None] = mapped_column(
        "metadata", JSON().with_variant(JSONB(), "postgresql"), nullable=True
    )
    submitted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    participation: Mapped["ContestParticipation"] = relationship(back_populates="submissions")  # noqa: F821
    category: Mapped["ContestCategory"] = relationship()  # noqa: F821
    ganado: Mapped["Ganado | None"] = relationship()  # noqa: F821
    media: Mapped[list["SubmissionMedia"]] = relationship(
        back_populates="submission", cascade="all, delete-orphan"
    )
    scores: Mapped[list["JudgingScore"]] = relationship(  # noqa: F821
        back_populates="submission", cascade="all, delete-orphan"
    )


class SubmissionMedia(Base):
    __tablename__ = "submission_media"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    submission_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contest_submissions.id", ondelete="CASCADE"), index=True
    )
    type: Mapped[str] = mapped_column(String(20), nullable=False, comment="image/video/document")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str | None] = mapped_column(String(100), nullable=True)
    size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, default=False)
    caption: Mapped[str | None] = mapped_column(String(500), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    submission: Mapped["ContestSubmission"] = relationship(back_populates="media")
