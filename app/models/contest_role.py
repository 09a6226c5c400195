import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base


class ContestRole(str, enum.Enum):
    CONTEST_ADMINISTRATOR = "CONTEST_ADMINISTRATOR"
    JUDGE = "JUDGE"
    PARTICIPANT = "PARTICIPANT"
    PUBLIC_VIEWER = "PUBLIC_VIEWER"


class ContestUserRole(Base):
    """Grants one role to one user within one contest."""

    __tablename__ = "contest_user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "contest_id", "role", name="uq_contest_user_role"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    user_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id", ondelete="CASCADE"), index=True
    )
    contest_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("contests.id", ondelete="CASCADE"), index=True
    )
    role: Mapped[str] = mapped_column(String(30), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    user: Mapped["User"] = relationship(back_populates="contest_roles")  # noqa: F821
    contest: Mapped["Contest"] = relationship(back_populates="user_roles")  # noqa: F821
