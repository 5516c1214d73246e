import uuid
from collections.abc import AsyncGenerator
from datetime import UTC, datetime, timedelta

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from nexus.core.config import settings
from nexus.models import ROLE_CANDIDATE, ROLE_RECRUITER, AccountProfile
from nexus.models.base import Base
from nexus.services.object_storage import PendingUpload
from nexus.wizard.flow import FlowContext

# Shared in-memory SQLite: every session in a test sees the same database
TEST_DATABASE_URL = "sqlite+aiosqlite://"

# Test user IDs (consistent across tests for predictable auth)
TEST_USER_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")
RECRUITER_ID = uuid.UUID("00000000-0000-0000-0000-000000000002")

# Security: This is a test-only secret. Production uses a real secret from env.
TEST_AUTH_SECRET = "test-secret-key-that-is-at-least-32-characters-long"  # nosec B105


def create_test_jwt(
    user_id: uuid.UUID = TEST_USER_ID,
    *,
    secret: str = TEST_AUTH_SECRET,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed JWT for test authentication.

    Args:
        user_id: User UUID to encode in the sub claim.
        secret: Signing secret (must match settings.auth_secret in tests).
        expires_delta: Time until expiration. Defaults to 1 hour.

    Returns:
        Encoded JWT string.
    """
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "aud": settings.auth_audience,
        "iss": settings.auth_issuer,
        "exp": now + (expires_delta or timedelta(hours=1)),
        "iat": now,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def make_upload(name: str = "photo.jpg", content: bytes = b"\xff\xd8\xff data") -> PendingUpload:
    """Build a validated pending upload for engine tests."""
    extension = name.rsplit(".", 1)[-1]
    content_type = "application/pdf" if extension == "pdf" else "image/jpeg"
    return PendingUpload(
        filename=name,
        content=content,
        content_type=content_type,
        extension=extension,
    )


class FakeObjectStore:
    """In-memory ObjectStore that can fail chosen uploads.

    Args:
        fail_on: 1-based call numbers that raise instead of storing.
    """

    def __init__(self, fail_on: set[int] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.calls: list[tuple[str, uuid.UUID, str]] = []
        self.urls: list[str] = []

    async def upload(
        self, bucket: str, owner_id: uuid.UUID, upload: PendingUpload
    ) -> str:
        self.calls.append((bucket, owner_id, upload.filename))
        if len(self.calls) in self.fail_on:
            raise RuntimeError(f"storage unavailable for {upload.filename}")
        url = f"https://cdn.test/{bucket}/{owner_id}/{upload.filename}"
        self.urls.append(url)
        return url


# =============================================================================
# Database
# =============================================================================


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create an in-memory test database with all tables."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def candidate_account(db_session: AsyncSession) -> AccountProfile:
    """Account profile for the candidate TEST_USER_ID."""
    account = AccountProfile(
        id=TEST_USER_ID,
        email="candidate@example.com",
        full_name="Casey Candidate",
        role=ROLE_CANDIDATE,
    )
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


@pytest_asyncio.fixture
async def recruiter_account(db_session: AsyncSession) -> AccountProfile:
    """Account profile for the recruiter RECRUITER_ID."""
    account = AccountProfile(
        id=RECRUITER_ID,
        email="recruiter@example.com",
        full_name="Riley Recruiter",
        role=ROLE_RECRUITER,
    )
    db_session.add(account)
    await db_session.commit()
    await db_session.refresh(account)
    return account


# =============================================================================
# Wizard engine
# =============================================================================


@pytest.fixture
def object_store() -> FakeObjectStore:
    return FakeObjectStore()


@pytest.fixture
def candidate_context(
    db_session: AsyncSession,
    candidate_account: AccountProfile,  # noqa: ARG001 - ensures account exists
    object_store: FakeObjectStore,
) -> FlowContext:
    return FlowContext(db=db_session, owner_id=TEST_USER_ID, store=object_store)


@pytest.fixture
def recruiter_context(
    db_session: AsyncSession,
    recruiter_account: AccountProfile,  # noqa: ARG001 - ensures account exists
    object_store: FakeObjectStore,
) -> FlowContext:
    return FlowContext(db=db_session, owner_id=RECRUITER_ID, store=object_store)


# =============================================================================
# API
# =============================================================================


async def _client_for(db_engine, user_id: uuid.UUID) -> AsyncGenerator[AsyncClient, None]:
    from nexus.core.database import get_db
    from nexus.main import app
    from nexus.wizard.registry import WizardSessionRegistry, get_registry

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            yield session

    # Fresh in-memory sessions for every test
    test_registry = WizardSessionRegistry(ttl=timedelta(minutes=5))

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_registry] = lambda: test_registry

    original_auth_enabled = settings.auth_enabled
    original_auth_secret = settings.auth_secret
    settings.auth_enabled = True
    settings.auth_secret = SecretStr(TEST_AUTH_SECRET)

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        cookies={settings.auth_cookie_name: create_test_jwt(user_id)},
    ) as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    settings.auth_secret = original_auth_secret
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    db_engine,
    candidate_account,  # noqa: ARG001 - ensures account exists
) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated client for the candidate TEST_USER_ID."""
    async for ac in _client_for(db_engine, TEST_USER_ID):
        yield ac


@pytest_asyncio.fixture
async def recruiter_client(
    db_engine,
    recruiter_account,  # noqa: ARG001 - ensures account exists
) -> AsyncGenerator[AsyncClient, None]:
    """Authenticated client for the recruiter RECRUITER_ID."""
    async for ac in _client_for(db_engine, RECRUITER_ID):
        yield ac


@pytest_asyncio.fixture
async def unauthenticated_client(db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Client with auth enabled but no session cookie."""
    from nexus.core.database import get_db
    from nexus.main import app

    test_session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_auth_enabled = settings.auth_enabled
    settings.auth_enabled = True

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    settings.auth_enabled = original_auth_enabled
    app.dependency_overrides.clear()
