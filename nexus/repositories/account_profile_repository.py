"""Repository for AccountProfile operations.

Account rows are created by the identity provider; this service only reads
them and applies partial updates.
"""

import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from nexus.models.account_profile import AccountProfile

# Fields that may be updated via AccountProfileRepository.update().
# Security: 'role' and 'email' are owned by the identity provider.
_UPDATABLE_FIELDS: frozenset[str] = frozenset(
    {
        "full_name",
        "location",
        "bio",
        "avatar_url",
    }
)


class AccountProfileRepository:
    """Stateless repository for profiles table operations."""

    @staticmethod
    async def get_by_id(db: AsyncSession, user_id: uuid.UUID) -> AccountProfile | None:
        """Fetch an account profile by primary key.

        Args:
            db: Async database session.
            user_id: Account profile id.

        Returns:
            AccountProfile if found, None otherwise.
        """
        return await db.get(AccountProfile, user_id)

    @staticmethod
    async def update(
        db: AsyncSession,
        user_id: uuid.UUID,
        **kwargs: str | None,
    ) -> AccountProfile | None:
        """Apply a partial update to an account profile.

        Only fields in _UPDATABLE_FIELDS are allowed. Unknown field names
        raise ValueError.

        Args:
            db: Async database session.
            user_id: Account profile id.
            **kwargs: Field names and new values.

        Returns:
            Updated AccountProfile, or None if it does not exist.

        Raises:
            ValueError: If a field name is not updatable.
        """
        invalid = set(kwargs) - _UPDATABLE_FIELDS
        if invalid:
            msg = f"Cannot update fields: {', '.join(sorted(invalid))}"
            raise ValueError(msg)

        profile = await db.get(AccountProfile, user_id)
        if profile is None:
            return None

        for key, value in kwargs.items():
            setattr(profile, key, value)

        await db.flush()
        await db.refresh(profile)
        return profile
