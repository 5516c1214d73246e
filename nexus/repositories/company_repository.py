"""Repository for Company operations.

Provides fetch-by-owner and upsert-by-owner for the companies table,
keyed by the unique recruiter_id.
"""

import uuid
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.models.company import Company
from nexus.repositories.upsert import upsert_by_owner

# Security: Never add 'id', 'recruiter_id', 'created_at', or 'updated_at'.
_UPSERTABLE_FIELDS: frozenset[str] = frozenset(
    {
        "name",
        "logo_url",
        "industry",
        "size",
        "website",
        "description",
        "location",
        "founded_year",
    }
)


class CompanyRepository:
    """Stateless repository for companies table operations."""

    @staticmethod
    async def get_by_recruiter_id(
        db: AsyncSession, recruiter_id: uuid.UUID
    ) -> Company | None:
        """Fetch the company owned by recruiter_id.

        Args:
            db: Async database session.
            recruiter_id: Owning recruiter account id.

        Returns:
            Company if one exists, None otherwise.
        """
        stmt = select(Company).where(Company.recruiter_id == recruiter_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @staticmethod
    async def upsert(
        db: AsyncSession,
        recruiter_id: uuid.UUID,
        /,
        **fields: Any,
    ) -> Company:
        """Create or update the company owned by recruiter_id.

        Args:
            db: Async database session.
            recruiter_id: Owning recruiter account id.
            **fields: Column values to write. Must include 'name' when the
                row does not exist yet.

        Returns:
            The stored Company, refreshed from the database.

        Raises:
            ValueError: If a field name is not upsertable.
        """
        invalid = set(fields) - _UPSERTABLE_FIELDS
        if invalid:
            msg = f"Cannot upsert fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        await upsert_by_owner(db, Company, Company.recruiter_id, recruiter_id, fields)
        stmt = (
            select(Company)
            .where(Company.recruiter_id == recruiter_id)
            .execution_options(populate_existing=True)
        )
        result = await db.execute(stmt)
        return result.scalar_one()
