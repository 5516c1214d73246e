"""Object storage for wizard uploads.

Maps (owner id, file) to a public URL. Objects are namespaced as
"{owner_id}/{timestamp}-{token}.{ext}" inside a bucket and stored as rows in
the stored_objects table; writing an existing path overwrites it.

Public URLs resolve to GET /api/v1/files/{bucket}/{path}.
"""

import logging
import secrets
import time
import uuid
from dataclasses import dataclass
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from nexus.core.config import settings
from nexus.repositories.stored_object_repository import StoredObjectRepository

logger = logging.getLogger(__name__)

AVATARS_BUCKET = "avatars"
RESUMES_BUCKET = "resumes"
COMPANY_LOGOS_BUCKET = "company-logos"

BUCKETS: frozenset[str] = frozenset(
    {AVATARS_BUCKET, RESUMES_BUCKET, COMPANY_LOGOS_BUCKET}
)


@dataclass(frozen=True)
class PendingUpload:
    """A validated local file waiting to be uploaded on submission.

    Attributes:
        filename: Client-supplied name (display only, never used in paths).
        content: Raw bytes.
        content_type: MIME type detected from the bytes.
        extension: Stored file extension derived from content_type.
    """

    filename: str
    content: bytes
    content_type: str
    extension: str


class ObjectStore(Protocol):
    """Upload collaborator used by the submission compiler."""

    async def upload(
        self, bucket: str, owner_id: uuid.UUID, upload: PendingUpload
    ) -> str:
        """Store the file and return its public URL."""
        ...


def object_path(owner_id: uuid.UUID, extension: str) -> str:
    """Build a unique path for a new object owned by owner_id.

    The millisecond timestamp orders uploads; the random token keeps two
    uploads in the same millisecond apart.
    """
    timestamp = int(time.time() * 1000)
    return f"{owner_id}/{timestamp}-{secrets.token_hex(4)}.{extension}"


def public_url(bucket: str, path: str) -> str:
    base = settings.public_base_url.rstrip("/")
    return f"{base}/api/v1/files/{bucket}/{path}"


def is_remote_url(value: object) -> bool:
    """True for values that already point at stored objects."""
    return isinstance(value, str) and value.startswith(("http://", "https://"))


class DatabaseObjectStore:
    """ObjectStore backed by the stored_objects table.

    Each upload runs in a SAVEPOINT so one failed write does not poison the
    surrounding transaction for the remaining uploads and the profile upsert.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def upload(
        self, bucket: str, owner_id: uuid.UUID, upload: PendingUpload
    ) -> str:
        """Store one object and return its public URL.

        Args:
            bucket: Target bucket (one of BUCKETS).
            owner_id: Owning user id (first path segment).
            upload: Validated file.

        Returns:
            Public URL of the stored object.

        Raises:
            ValueError: If bucket is unknown.
        """
        if bucket not in BUCKETS:
            raise ValueError(f"Unknown bucket '{bucket}'")

        path = object_path(owner_id, upload.extension)
        async with self._db.begin_nested():
            await StoredObjectRepository.put(
                self._db,
                bucket=bucket,
                path=path,
                content=upload.content,
                content_type=upload.content_type,
            )
        logger.info(
            "Stored object %s/%s (%d bytes)", bucket, path, len(upload.content)
        )
        return public_url(bucket, path)
