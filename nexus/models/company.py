"""Company model - a recruiter's company profile.

One row per recruiter, keyed by the unique `recruiter_id`.
"""

import uuid

from sqlalchemy import ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from nexus.models.base import Base, TimestampMixin


class Company(Base, TimestampMixin):
    """Company profile row.

    Attributes:
        id: UUID primary key.
        recruiter_id: Owning recruiter account (unique).
        name: Company name.
        logo_url: Public URL of the uploaded logo.
        industry: Industry from the fixed catalog.
        size: Size bracket from the fixed catalog.
        website: Company website.
        description: Free-text company story.
        location: Composed "address, city, state, country postal" string.
            Not re-parseable into its parts.
        founded_year: Year the company was founded.
    """

    __tablename__ = "companies"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    recruiter_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("profiles.id", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
    industry: Mapped[str | None] = mapped_column(String(50), nullable=True)
    size: Mapped[str | None] = mapped_column(String(50), nullable=True)
    website: Mapped[str | None] = mapped_column(Text(), nullable=True)
    description: Mapped[str | None] = mapped_column(Text(), nullable=True)
    location: Mapped[str | None] = mapped_column(Text(), nullable=True)
    founded_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
