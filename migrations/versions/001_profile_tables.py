"""Create profile tables: profiles, candidate_profiles, companies, stored_objects.

Revision ID: 001_profile_tables
Revises:
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_profile_tables"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def upgrade() -> None:
    # Account profiles - written by the identity provider, read here
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        *_timestamps(),
        sa.CheckConstraint(
            "role IN ('candidate', 'recruiter')",
            name="ck_profiles_role",
        ),
    )

    # Candidate profiles - one row per candidate (unique user_id)
    op.create_table(
        "candidate_profiles",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("photos", _JSON, nullable=True),
        sa.Column("interests", _JSON, nullable=True),
        sa.Column("availability", _JSON, nullable=True),
        sa.Column("transportation", sa.String(20), nullable=True),
        sa.Column("hobbies", _JSON, nullable=True),
        sa.Column("quick_facts", _JSON, nullable=True),
        sa.Column("prompts", _JSON, nullable=True),
        sa.Column("experience", _JSON, nullable=True),
        sa.Column("experience_years", sa.Integer(), nullable=True),
        sa.Column("education", sa.Text(), nullable=True),
        sa.Column("skills", _JSON, nullable=True),
        sa.Column("resume_url", sa.Text(), nullable=True),
        sa.Column("portfolio_url", sa.Text(), nullable=True),
        sa.Column("linkedin_url", sa.Text(), nullable=True),
        sa.Column("achievements", sa.Text(), nullable=True),
        sa.Column("hourly_rate", sa.String(50), nullable=True),
        *_timestamps(),
    )

    # Companies - one row per recruiter (unique recruiter_id)
    op.create_table(
        "companies",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "recruiter_id",
            sa.Uuid(),
            sa.ForeignKey("profiles.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("industry", sa.String(50), nullable=True),
        sa.Column("size", sa.String(50), nullable=True),
        sa.Column("website", sa.Text(), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.Text(), nullable=True),
        sa.Column("founded_year", sa.Integer(), nullable=True),
        *_timestamps(),
    )

    # Stored objects - uploaded binaries addressed by (bucket, path)
    op.create_table(
        "stored_objects",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("bucket", sa.String(50), nullable=False),
        sa.Column("path", sa.String(255), nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
        sa.Column("size_bytes", sa.Integer(), nullable=False),
        sa.Column("content", sa.LargeBinary(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("bucket", "path", name="uq_stored_objects_bucket_path"),
    )


def downgrade() -> None:
    op.drop_table("stored_objects")
    op.drop_table("companies")
    op.drop_table("candidate_profiles")
    op.drop_table("profiles")
