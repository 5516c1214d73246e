"""Submission helpers shared by the flow writers.

Uploads pending files, recombines them with already-stored URLs, and
re-derives computed columns before the owning record is upserted.
"""

import logging
import re
import uuid
from collections.abc import Sequence

from nexus.services.object_storage import ObjectStore, PendingUpload, is_remote_url
from nexus.wizard.fields import ExperienceEntry

logger = logging.getLogger(__name__)

# Only "<digits> year" phrasing counts; "6 months" or "2022-2024" add nothing.
_YEARS_PATTERN = re.compile(r"(\d+)\s*year", re.IGNORECASE)


async def upload_pending(
    store: ObjectStore,
    bucket: str,
    owner_id: uuid.UUID,
    uploads: Sequence[PendingUpload],
) -> list[str]:
    """Upload files one at a time, dropping any that fail.

    A failed upload is logged and skipped; it never fails the submission.

    Args:
        store: Object store collaborator.
        bucket: Target bucket.
        owner_id: Owning user id (path namespace).
        uploads: Pending files in the order they were added.

    Returns:
        Public URLs of the files that uploaded, in input order.
    """
    urls = []
    for upload in uploads:
        try:
            urls.append(await store.upload(bucket, owner_id, upload))
        except Exception:  # noqa: BLE001 - one bad file must not block the rest
            logger.warning(
                "Upload of %s to %s failed for owner %s; dropping file",
                upload.filename,
                bucket,
                owner_id,
                exc_info=True,
            )
    return urls


def recombine_urls(existing: Sequence[str], uploaded: Sequence[str]) -> list[str]:
    """Kept remote URLs first, then newly uploaded ones."""
    return [url for url in existing if is_remote_url(url)] + list(uploaded)


def experience_years(entries: Sequence[ExperienceEntry]) -> int:
    """Sum the first "<N> year" figure of each entry's duration.

    Example: ["2021 - Present", "3 years"] -> 3.
    """
    total = 0
    for entry in entries:
        match = _YEARS_PATTERN.search(entry.duration or "")
        if match:
            total += int(match.group(1))
    return total
