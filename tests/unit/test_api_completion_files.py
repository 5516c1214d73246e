"""Tests for the profile completion and file download endpoints.

These tests verify:
- GET /api/v1/profile-completion scores the current candidate
- Completion is candidate-only
- GET /api/v1/files/{bucket}/{path} serves stored bytes with cache headers
- Unknown buckets and missing objects return 404
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.models import AccountProfile
from nexus.repositories.candidate_profile_repository import CandidateProfileRepository
from nexus.repositories.stored_object_repository import StoredObjectRepository
from tests.conftest import TEST_USER_ID

_COMPLETION = "/api/v1/profile-completion"
_FILES = "/api/v1/files"


# =============================================================================
# Completion
# =============================================================================


class TestProfileCompletion:
    """GET /api/v1/profile-completion."""

    @pytest.mark.asyncio
    async def test_no_profile_scores_zero(self, client: AsyncClient):
        """A candidate without a profile row needs both flows."""
        response = await client.get(_COMPLETION)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "personal": 0,
            "professional": 0,
            "needs_personal": True,
            "needs_professional": True,
        }

    @pytest.mark.asyncio
    async def test_scores_stored_profile(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        candidate_account: AccountProfile,
    ):
        """Location comes from the account profile."""
        candidate_account.location = "Austin, TX"
        await CandidateProfileRepository.upsert(
            db_session,
            TEST_USER_ID,
            interests=["retail"],
            availability=["Mon-AM"],
            skills=["Python"],
            experience_years=2,
        )
        await db_session.commit()

        data = (await client.get(_COMPLETION)).json()["data"]

        assert data["personal"] == 35
        assert data["professional"] == 40
        assert data["needs_personal"] is True

    @pytest.mark.asyncio
    async def test_recruiter_is_forbidden(self, recruiter_client: AsyncClient):
        """Completion is a candidate dashboard feature."""
        response = await recruiter_client.get(_COMPLETION)

        assert response.status_code == 403


# =============================================================================
# Files
# =============================================================================


class TestDownloadFile:
    """GET /api/v1/files/{bucket}/{path}."""

    @pytest.mark.asyncio
    async def test_serves_stored_object(self, client: AsyncClient, db_session: AsyncSession):
        """Stored bytes come back with their content type and cache policy."""
        path = f"{TEST_USER_ID}/1700000000000-abcd1234.jpg"
        await StoredObjectRepository.put(
            db_session,
            bucket="avatars",
            path=path,
            content=b"\xff\xd8\xff data",
            content_type="image/jpeg",
        )
        await db_session.commit()

        response = await client.get(f"{_FILES}/avatars/{path}")

        assert response.status_code == 200
        assert response.content == b"\xff\xd8\xff data"
        assert response.headers["content-type"] == "image/jpeg"
        assert "immutable" in response.headers["cache-control"]
        assert response.headers["cross-origin-resource-policy"] == "cross-origin"
        assert response.headers["x-content-type-options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_missing_object(self, client: AsyncClient):
        """Unknown paths return 404."""
        response = await client.get(f"{_FILES}/avatars/{TEST_USER_ID}/missing.jpg")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "NOT_FOUND"

    @pytest.mark.asyncio
    async def test_unknown_bucket(self, client: AsyncClient):
        """Only the upload buckets are served."""
        response = await client.get(f"{_FILES}/secrets/{TEST_USER_ID}/a.jpg")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_api_responses_are_not_cached(self, client: AsyncClient):
        """Other API responses keep the no-store policy."""
        response = await client.get(_COMPLETION)

        assert response.headers["cache-control"] == "no-store, max-age=0"
        assert response.headers["cross-origin-resource-policy"] == "same-origin"


@pytest.mark.asyncio
async def test_health(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}
