"""Stored object download router.

Serves the public URLs issued by the object store. Objects are stored as
bytes in the stored_objects table (no S3, no filesystem paths).
"""

from fastapi import APIRouter, Response

from nexus.api.deps import DbSession
from nexus.core.errors import NotFoundError
from nexus.repositories.stored_object_repository import StoredObjectRepository
from nexus.services.object_storage import BUCKETS

router = APIRouter()


@router.get("/{bucket}/{path:path}")
async def download_object(
    bucket: str,
    path: str,
    db: DbSession,
) -> Response:
    """Return a stored object's bytes.

    Public by design: profile photos, resumes and logos are linked from
    profile pages.

    Args:
        bucket: Bucket name.
        path: Object path ("{owner_id}/{timestamp}-{token}.{ext}").
        db: Database session (injected).

    Returns:
        Raw bytes with the stored content type.

    Raises:
        NotFoundError: Unknown bucket or missing object.
    """
    if bucket not in BUCKETS:
        raise NotFoundError("File")

    stored = await StoredObjectRepository.get(db, bucket, path)
    if stored is None:
        raise NotFoundError("File")

    return Response(
        content=stored.content,
        media_type=stored.content_type,
        headers={
            "Cache-Control": "public, max-age=31536000, immutable",
            # Linked from the web client on another origin
            "Cross-Origin-Resource-Policy": "cross-origin",
            # Security: never let a stored upload be sniffed as HTML/script
            "X-Content-Type-Options": "nosniff",
        },
    )
