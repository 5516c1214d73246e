"""Repository for CandidateProfile operations.

Provides fetch-by-owner and upsert-by-owner for the candidate_profiles
table. The unique user_id guarantees at most one row per candidate.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.models.candidate_profile import CandidateProfile
from nexus.repositories.upsert import upsert_by_owner

# Fields that may be written via CandidateProfileRepository.upsert().
# Security: Never add 'id', 'user_id', 'created_at', or 'updated_at'.
_UPSERTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "photos",
        "interests",
        "availability",
        "transportation",
        "hobbies",
        "quick_facts",
        "prompts",
        "experience",
        "experience_years",
        "education",
        "skills",
        "resume_url",
        "portfolio_url",
        "linkedin_url",
        "achievements",
    }
)


class CandidateProfileRepository:
    """Stateless repository for candidate_profiles table operations.

    All methods are static. Pass an AsyncSession for every call so the
    caller controls transaction boundaries.
    """

    @staticmethod
    async def get_by_user_id(
        db: AsyncSession, user_id: uuid.UUID
    ) -> CandidateProfile | None:
        """Fetch the candidate profile owned by user_id.

        Args:
            db: Async database session.
            user_id: Owning account profile id.

        Returns:
            CandidateProfile if one exists, None otherwise.
        """
        stmt = select(CandidateProfile).where(CandidateProfile.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert(
        db: AsyncSession,
        user_id: uuid.UUID,
        /,
        **fields: Any,
    ) -> CandidateProfile:
        """Create or update the candidate profile owned by user_id.

        Inserts when absent, otherwise updates exactly the provided fields.

        Args:
            db: Async database session.
            user_id: Owning account profile id.
            **fields: Column values to write.

        Returns:
            The stored CandidateProfile, refreshed from the database.

        Raises:
            ValueError: If a field name is not upsertable.
        """
        invalid = set(fields) - _UPSERTABLE_FIELDS
        if invalid:
            msg = f"Cannot upsert fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        await upsert_by_owner(
            db, CandidateProfile, CandidateProfile.user_id, user_id, fields
        )
        stmt = (
            select(CandidateProfile)
            .where(CandidateProfile.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalar_one()
