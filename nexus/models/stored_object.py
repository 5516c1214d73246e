"""Stored object model - binary uploads served through public URLs.

All uploaded files (photos, resumes, logos) are stored as binary rows,
addressed by (bucket, path). Paths are namespaced by owner id.
"""

import uuid

from sqlalchemy import Integer, LargeBinary, String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from nexus.models.base import Base, TimestampMixin


class StoredObject(Base, TimestampMixin):
    """Binary object in a storage bucket.

    Attributes:
        id: UUID primary key.
        bucket: Bucket name ("avatars", "resumes", "company-logos").
        path: "{owner_id}/{timestamp}-{token}.{ext}".
        content_type: Detected MIME type.
        size_bytes: Length of the stored content.
        content: Raw file bytes.
    """

    __tablename__ = "stored_objects"
    __table_args__ = (
        UniqueConstraint("bucket", "path", name="uq_stored_objects_bucket_path"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
    )
    bucket: Mapped[str] = mapped_column(String(50), nullable=False)
    path: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)
    size_bytes: Mapped[int] = mapped_column(Integer, nullable=False)
    content: Mapped[bytes] = mapped_column(LargeBinary(), nullable=False)
