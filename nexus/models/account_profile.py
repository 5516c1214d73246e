"""Account profile model - the identity provider's cached user row.

One row per authenticated user. The profile flows read `role` for access
and `location` for personal completion scoring, and write `location` as the
personal flow's secondary update.
"""

import uuid

from sqlalchemy import CheckConstraint, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from nexus.models.base import Base, TimestampMixin

ROLE_CANDIDATE = "candidate"
ROLE_RECRUITER = "recruiter"


class AccountProfile(Base, TimestampMixin):
    """Account profile for a candidate or recruiter.

    Attributes:
        id: UUID primary key (same as the identity provider's user id).
        full_name: Display name.
        email: Contact email.
        role: Either "candidate" or "recruiter".
        location: Free-text home location ("Austin, TX").
        bio: Short free-text bio.
        avatar_url: Public URL of the avatar image.
    """

    __tablename__ = "profiles"
    __table_args__ = (
        CheckConstraint(
            f"role IN ('{ROLE_CANDIDATE}', '{ROLE_RECRUITER}')",
            name="ck_profiles_role",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    full_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ROLE_CANDIDATE,
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text(), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(Text(), nullable=True)
