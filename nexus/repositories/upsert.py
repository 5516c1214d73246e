"""Owner-keyed upsert shared by the profile repositories.

Builds INSERT ... ON CONFLICT (owner) DO UPDATE for the bound dialect.
PostgreSQL and SQLite both implement the same construct.
"""

from collections.abc import Callable, Mapping
from typing import Any

from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import InstrumentedAttribute

from nexus.models.base import Base

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def dialect_insert(db: AsyncSession) -> Callable[..., Any]:
    """Return the ON CONFLICT-capable insert() for the session's dialect.

    Raises:
        NotImplementedError: If the bound dialect has no upsert support.
    """
    dialect_name = db.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect_name)
    if insert is None:
        raise NotImplementedError(f"Upsert not supported for dialect '{dialect_name}'")
    return insert


async def upsert_by_owner(
    db: AsyncSession,
    model: type[Base],
    owner_column: InstrumentedAttribute,
    owner_id: object,
    values: Mapping[str, Any],
) -> None:
    """Insert a row for owner_id, or update the provided fields if one exists.

    Only the keys in `values` are written on conflict; other columns keep
    their stored values.

    Args:
        db: Async database session.
        model: ORM model class of the target table.
        owner_column: Unique owner key column (e.g. CandidateProfile.user_id).
        owner_id: Owner key value.
        values: Column values to write.

    Raises:
        NotImplementedError: If the bound dialect has no upsert support.
    """
    insert = dialect_insert(db)
    row = {**values, owner_column.key: owner_id}
    stmt = insert(model).values(**row)
    stmt = stmt.on_conflict_do_update(
        index_elements=[owner_column.key],
        set_={**values, "updated_at": func.now()},
    )
    await db.execute(stmt)
