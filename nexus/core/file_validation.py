"""File validation utilities for secure file uploads.

Security: Validates file content (magic bytes), enforces size limits,
and derives the stored extension from the detected type rather than the
client-supplied filename.
"""

from typing import TYPE_CHECKING

import magic
import structlog

if TYPE_CHECKING:
    from fastapi import UploadFile

from nexus.core.config import settings
from nexus.core.errors import ValidationError

logger = structlog.get_logger()

# Chunk size for reading files (64 KB)
CHUNK_SIZE_BYTES = 64 * 1024

# Allowed MIME types per upload kind, mapped to the stored file extension
IMAGE_MIMES: dict[str, str] = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}
PDF_MIMES: dict[str, str] = {
    "application/pdf": "pdf",
}


async def read_file_with_size_limit(
    file: "UploadFile",
    max_size: int | None = None,
) -> bytes:
    """Read file content with size limit to prevent DoS.

    Args:
        file: UploadFile from FastAPI.
        max_size: Maximum allowed file size in bytes. Defaults to the
            configured upload limit.

    Returns:
        File content as bytes.

    Raises:
        ValidationError: If file exceeds size limit or is empty.
    """
    limit = max_size if max_size is not None else settings.upload_max_size_bytes
    content = b""
    total_size = 0

    while True:
        chunk = await file.read(CHUNK_SIZE_BYTES)
        if not chunk:
            break
        total_size += len(chunk)
        if total_size > limit:
            raise ValidationError(
                message=f"File too large. Maximum size: {limit // (1024 * 1024)}MB",
                details=[{"field": "file", "error": "FILE_TOO_LARGE"}],
            )
        content += chunk

    if not content:
        raise ValidationError(
            message="File is empty.",
            details=[{"field": "file", "error": "FILE_EMPTY"}],
        )

    return content


def validate_file_content(
    content: bytes,
    filename: str,
    allowed: dict[str, str],
) -> tuple[str, str]:
    """Validate file content using magic bytes (not just extension).

    Args:
        content: File binary content.
        filename: Original filename (for log messages).
        allowed: Mapping of accepted MIME types to stored extensions.

    Returns:
        Tuple of (detected MIME type, file extension).

    Raises:
        ValidationError: If file content doesn't match an allowed MIME type.
    """
    detected_mime = magic.from_buffer(content, mime=True)

    if detected_mime not in allowed:
        # Log detected MIME for server-side debugging; do NOT expose to client
        logger.warning(
            "File content validation failed",
            detected_mime=detected_mime,
            filename=filename,
        )
        accepted = ", ".join(sorted(ext.upper() for ext in set(allowed.values())))
        raise ValidationError(
            message=f"Invalid file type. Allowed: {accepted}.",
            details=[{"field": "file", "error": "INVALID_FILE_CONTENT"}],
        )

    return detected_mime, allowed[detected_mime]
