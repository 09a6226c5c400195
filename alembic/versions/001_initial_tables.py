"""Initial tables

Revision ID: 001
Revises:
Create Date: 2025-01-01 00:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(*, updated: bool = True) -> list[sa.Column]:
    columns = [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]
    if updated:
        columns.append(
            sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now())
        )
    return columns


def upgrade() -> None:
    # ── Identity ───────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("nombre", sa.String(255), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("activo", sa.Boolean(), server_default=sa.text("true")),
        *_timestamps(),
    )
    op.create_index("ix_users_email", "users", ["email"])

    # ── Catalog ────────────────────────────────────────────────────────────
    op.create_table(
        "companies",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("logo", sa.String(500), nullable=True),
        sa.Column("is_featured", sa.Boolean(), server_default=sa.text("false")),
        sa.Column("is_published", sa.Boolean(), server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_companies_slug", "companies", ["slug"])

    op.create_table(
        "criadores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("apellido", sa.String(255), nullable=True),
        sa.Column("empresa", sa.String(255), nullable=True),
        sa.Column("telefono", sa.String(50), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("direccion", sa.String(500), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "ganado",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "criador_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("criadores.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("nombre", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("sexo", sa.String(10), nullable=False),
        sa.Column("raza", sa.String(100), nullable=True),
        sa.Column("num_registro", sa.String(100), nullable=True),
        sa.Column("fecha_nac", sa.DateTime(timezone=True), nullable=True),
        sa.Column("establo", sa.String(255), nullable=True),
        sa.Column("propietario", sa.String(255), nullable=True),
        sa.Column("remate", sa.Boolean(), server_default=sa.text("false")),
        sa.Column("puntaje", sa.Float(), nullable=True),
        sa.Column("descripcion", sa.Text(), nullable=True),
        sa.Column("is_featured", sa.Boolean(), server_default=sa.text("false")),
        sa.Column("is_published", sa.Boolean(), server_default=sa.text("false")),
        *_timestamps(),
    )
    op.create_index("ix_ganado_criador_id", "ganado", ["criador_id"])
    op.create_index("ix_ganado_slug", "ganado", ["slug"])
    op.create_index("ix_ganado_sexo", "ganado", ["sexo"])
    op.create_index("ix_ganado_raza", "ganado", ["raza"])

    # ── Contests ───────────────────────────────────────────────────────────
    op.create_table(
        "contests",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "company_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("companies.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), unique=True, nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("status", sa.String(30), server_default="DRAFT"),
        sa.Column("registration_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("registration_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("contest_start", sa.DateTime(timezone=True), nullable=False),
        sa.Column("contest_end", sa.DateTime(timezone=True), nullable=False),
        sa.Column("results_published", sa.DateTime(timezone=True), nullable=True),
        sa.Column("max_participants", sa.Integer(), nullable=True),
        sa.Column("entry_fee", sa.Float(), server_default="0"),
        sa.Column("rules", sa.Text(), nullable=True),
        sa.Column("prizes", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), server_default=sa.text("true")),
        sa.Column("is_featured", sa.Boolean(), server_default=sa.text("false")),
        sa.Column("banner_image", sa.String(500), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_contests_company_id", "contests", ["company_id"])
    op.create_index("ix_contests_slug", "contests", ["slug"])
    op.create_index("ix_contests_status", "contests", ["status"])
    op.create_index("ix_contests_created_at", "contests", ["created_at"])

    op.create_table(
        "contest_user_roles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "contest_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("role", sa.String(30), nullable=False),
        *_timestamps(updated=False),
        sa.UniqueConstraint("user_id", "contest_id", "role", name="uq_contest_user_role"),
    )
    op.create_index("ix_contest_user_roles_user_id", "contest_user_roles", ["user_id"])
    op.create_index("ix_contest_user_roles_contest_id", "contest_user_roles", ["contest_id"])

    op.create_table(
        "contest_participations",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "contest_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("status", sa.String(20), server_default="PENDING"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("registered_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("approved_at", sa.DateTime(timezone=True), nullable=True),
        sa.UniqueConstraint("user_id", "contest_id", name="uq_participation_user_contest"),
    )
    op.create_index("ix_contest_participations_user_id", "contest_participations", ["user_id"])
    op.create_index("ix_contest_participations_contest_id", "contest_participations", ["contest_id"])
    op.create_index("ix_contest_participations_status", "contest_participations", ["status"])
    op.create_index(
        "ix_contest_participations_registered_at", "contest_participations", ["registered_at"]
    )

    op.create_table(
        "judging_assignments",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "judge_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "contest_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("judge_id", "contest_id", name="uq_judging_assignment"),
    )
    op.create_index("ix_judging_assignments_judge_id", "judging_assignments", ["judge_id"])
    op.create_index("ix_judging_assignments_contest_id", "judging_assignments", ["contest_id"])

    op.create_table(
        "contest_categories",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "contest_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contests.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("order", sa.Integer(), server_default="0"),
        sa.Column("age_min", sa.Integer(), nullable=True, comment="Days"),
        sa.Column("age_max", sa.Integer(), nullable=True, comment="Days"),
        sa.Column("sexo", sa.String(10), nullable=True),
        sa.Column("product_type", sa.String(100), nullable=True),
        sa.Column("weight_min", sa.Float(), nullable=True),
        sa.Column("weight_max", sa.Float(), nullable=True),
        sa.Column("max_entries", sa.Integer(), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("ix_contest_categories_contest_id", "contest_categories", ["contest_id"])

    op.create_table(
        "judging_criteria",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "contest_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contests.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contest_categories.id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("weight", sa.Float(), server_default="1"),
        sa.Column("max_score", sa.Float(), server_default="100"),
        sa.Column("order", sa.Integer(), server_default="0"),
        *_timestamps(updated=False),
    )
    op.create_index("ix_judging_criteria_contest_id", "judging_criteria", ["contest_id"])
    op.create_index("ix_judging_criteria_category_id", "judging_criteria", ["category_id"])

    # ── Submissions and scoring ────────────────────────────────────────────
    op.create_table(
        "contest_submissions",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "participation_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contest_participations.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "category_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contest_categories.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "ganado_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("ganado.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(20), server_default="DRAFT"),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column("submitted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index(
        "ix_contest_submissions_participation_id", "contest_submissions", ["participation_id"]
    )
    op.create_index("ix_contest_submissions_category_id", "contest_submissions", ["category_id"])
    op.create_index("ix_contest_submissions_ganado_id", "contest_submissions", ["ganado_id"])
    op.create_index("ix_contest_submissions_status", "contest_submissions", ["status"])
    op.create_index("ix_contest_submissions_created_at", "contest_submissions", ["created_at"])

    op.create_table(
        "submission_media",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "submission_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contest_submissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("type", sa.String(20), nullable=False, comment="image/video/document"),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("filename", sa.String(255), nullable=False),
        sa.Column("mime_type", sa.String(100), nullable=True),
        sa.Column("size", sa.Integer(), nullable=True),
        sa.Column("is_primary", sa.Boolean(), server_default=sa.text("false")),
        sa.Column("caption", sa.String(500), nullable=True),
        *_timestamps(updated=False),
    )
    op.create_index("ix_submission_media_submission_id", "submission_media", ["submission_id"])

    op.create_table(
        "judging_scores",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "judge_id",
            sa.String(255),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "submission_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("contest_submissions.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "criteria_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("judging_criteria.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("score", sa.Float(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column("scored_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint(
            "judge_id", "submission_id", "criteria_id", name="uq_judging_score"
        ),
        sa.CheckConstraint("score >= 0", name="ck_judging_score_positive"),
    )
    op.create_index("ix_judging_scores_judge_id", "judging_scores", ["judge_id"])
    op.create_index("ix_judging_scores_submission_id", "judging_scores", ["submission_id"])
    op.create_index("ix_judging_scores_criteria_id", "judging_scores", ["criteria_id"])


def downgrade() -> None:
    op.drop_table("judging_scores")
    op.drop_table("submission_media")
    op.drop_table("contest_submissions")
    op.drop_table("judging_criteria")
    op.drop_table("contest_categories")
    op.drop_table("judging_assignments")
    op.drop_table("contest_participations")
    op.drop_table("contest_user_roles")
    op.drop_table("contests")
    op.drop_table("ganado")
    op.drop_table("criadores")
    op.drop_table("companies")
    op.drop_table("users")
