"""Candidate profile model - personal and professional profile data.

Both candidate flows write to the same row, keyed by the unique `user_id`.
Storage encodings:
- photos, interests, availability, hobbies, quick_facts, skills: JSON arrays
- prompts, experience: JSON arrays of objects
- education: blank-line separated entries, newline separated fields
- achievements: "; " joined string
"""

import uuid
from typing import Any

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from nexus.models.base import Base, JSONColumn, TimestampMixin


class CandidateProfile(Base, TimestampMixin):
    """Candidate profile row.

    Attributes:
        id: UUID primary key.
        user_id: Owning account profile (unique: one row per candidate).
        photos: Ordered public photo URLs (at most 5).
        interests: Work interest ids (at most 3).
        availability: "{day}-{slot}" keys, e.g. "Mon-AM".
        transportation: Main transport mode id.
        hobbies: General interests (at most 10).
        quick_facts: Quick fact ids (at most 10).
        prompts: List of {"prompt", "answer"} objects.
        experience: List of {"title", "company", "duration", "description"}.
        experience_years: Derived from experience durations on save.
        education: Encoded education entries.
        skills: Soft, technical and custom skills (uncategorized).
        resume_url: Public URL of the uploaded resume.
        portfolio_url: Portfolio website.
        linkedin_url: LinkedIn profile URL.
        achievements: Encoded achievements list.
        hourly_rate: Free-text hourly rate (not edited by the flows).
    """

    __tablename__ = "candidate_profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    photos: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    interests: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    availability: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    transportation: Mapped[str | None] = mapped_column(String(20), nullable=True)
    hobbies: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    quick_facts: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    prompts: Mapped[Any] = mapped_column(JSONColumn, nullable=True)
    experience: Mapped[Any] = mapped_column(JSONColumn, nullable=True)
    experience_years: Mapped[int | None] = mapped_column(Integer, nullable=True)
    education: Mapped[str | None] = mapped_column(Text(), nullable=True)
    skills: Mapped[list[str] | None] = mapped_column(JSONColumn, nullable=True)
    resume_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    portfolio_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    achievements: Mapped[str | None] = mapped_column(Text(), nullable=True)
    hourly_rate: Mapped[str | None] = mapped_column(String(50), nullable=True)
