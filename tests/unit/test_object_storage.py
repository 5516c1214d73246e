"""Tests for the database-backed object store.

Tests verify:
- Uploads are namespaced by owner and get unique paths
- The returned public URL points at the files endpoint
- Unknown buckets are rejected
- Stored bytes and content type are readable back
"""

import re

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.core.config import settings
from nexus.repositories.stored_object_repository import StoredObjectRepository
from nexus.services.object_storage import (
    AVATARS_BUCKET,
    DatabaseObjectStore,
    is_remote_url,
    object_path,
)
from tests.conftest import TEST_USER_ID, make_upload

_PATH_PATTERN = re.compile(rf"^{TEST_USER_ID}/\d+-[0-9a-f]{{8}}\.jpg$")


class TestObjectPath:
    """Object path layout."""

    def test_path_is_namespaced_by_owner(self) -> None:
        assert _PATH_PATTERN.match(object_path(TEST_USER_ID, "jpg"))

    def test_paths_are_unique(self) -> None:
        paths = {object_path(TEST_USER_ID, "jpg") for _ in range(50)}

        assert len(paths) == 50


class TestIsRemoteUrl:
    """Distinguishing stored URLs from anything else."""

    def test_http_urls(self) -> None:
        assert is_remote_url("https://cdn.test/a.jpg") is True
        assert is_remote_url("http://localhost/a.jpg") is True

    def test_other_values(self) -> None:
        assert is_remote_url("blob:abc") is False
        assert is_remote_url("") is False
        assert is_remote_url(None) is False


class TestDatabaseObjectStore:
    """Storing uploads as rows."""

    async def test_upload_stores_bytes_and_returns_url(
        self, db_session: AsyncSession
    ) -> None:
        store = DatabaseObjectStore(db_session)

        url = await store.upload(AVATARS_BUCKET, TEST_USER_ID, make_upload("me.jpg"))

        prefix = f"{settings.public_base_url.rstrip('/')}/api/v1/files/{AVATARS_BUCKET}/"
        assert url.startswith(prefix)
        path = url.removeprefix(prefix)
        assert _PATH_PATTERN.match(path)

        stored = await StoredObjectRepository.get(db_session, AVATARS_BUCKET, path)
        assert stored.content == b"\xff\xd8\xff data"
        assert stored.content_type == "image/jpeg"
        assert stored.size_bytes == len(b"\xff\xd8\xff data")

    async def test_two_uploads_get_distinct_urls(self, db_session: AsyncSession) -> None:
        store = DatabaseObjectStore(db_session)

        first = await store.upload(AVATARS_BUCKET, TEST_USER_ID, make_upload())
        second = await store.upload(AVATARS_BUCKET, TEST_USER_ID, make_upload())

        assert first != second

    async def test_unknown_bucket_is_rejected(self, db_session: AsyncSession) -> None:
        store = DatabaseObjectStore(db_session)

        with pytest.raises(ValueError, match="Unknown bucket"):
            await store.upload("secrets", TEST_USER_ID, make_upload())

    async def test_put_overwrites_same_path(self, db_session: AsyncSession) -> None:
        for content in (b"old", b"new"):
            await StoredObjectRepository.put(
                db_session,
                bucket=AVATARS_BUCKET,
                path="owner/fixed.jpg",
                content=content,
                content_type="image/jpeg",
            )
        db_session.expire_all()

        stored = await StoredObjectRepository.get(db_session, AVATARS_BUCKET, "owner/fixed.jpg")

        assert stored.content == b"new"
        assert stored.size_bytes == 3
