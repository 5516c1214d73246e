"""SQLAlchemy base classes and common mixins.

Defines the declarative base, the timestamp mixin, and the JSON column type
shared by every profile table.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, func, inspect
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests).
JSONColumn = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    type_annotation_map = {
        datetime: DateTime(timezone=True),
    }

    def as_record(self) -> dict[str, Any]:
        """Return column values as a plain dict keyed by column name.

        Used where a persisted row is consumed as a generic record
        (completion scoring, draft reconciliation).
        """
        mapper = inspect(type(self))
        return {column.key: getattr(self, column.key) for column in mapper.column_attrs}


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns.

    Attributes:
        created_at: Timestamp when the record was created. Set automatically
            by the database on insert.
        updated_at: Timestamp when the record was last modified. Updated
            automatically by the database on each ORM update; upserts set it
            explicitly.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
