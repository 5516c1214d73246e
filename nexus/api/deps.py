"""Shared dependencies for API endpoints.

Local mode uses DEFAULT_USER_ID; hosted mode validates a JWT from the
session cookie. The identity provider owns accounts: this service only
reads the cached account profile row.

WHY DEPENDENCY INJECTION:
- Consistent auth across all endpoints
- Easy to swap implementations (local → hosted, real → fake object store)
- Testable with overridden dependencies
"""

import uuid
from typing import Annotated

import jwt
import structlog
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from nexus.core.config import settings
from nexus.core.database import get_db
from nexus.core.errors import ForbiddenError, UnauthorizedError
from nexus.models import AccountProfile
from nexus.repositories.account_profile_repository import AccountProfileRepository
from nexus.services.object_storage import DatabaseObjectStore, ObjectStore
from nexus.wizard.registry import WizardSessionRegistry, get_registry

logger = structlog.get_logger()


async def get_current_user_id(request: Request) -> uuid.UUID:
    """Get current user ID from auth context.

    Validation steps (hosted mode):
    1. Read JWT from cookie
    2. Decode + verify signature (HS256)
    3. Verify exp, aud, iss claims
    4. Extract sub as UUID

    Args:
        request: HTTP request (injected by FastAPI).

    Returns:
        UUID of the current authenticated user.

    Raises:
        UnauthorizedError: For any auth failure.
    """
    if not settings.auth_enabled:
        # Local mode: use DEFAULT_USER_ID from environment
        if settings.default_user_id is None:
            raise UnauthorizedError()
        return settings.default_user_id

    token = request.cookies.get(settings.auth_cookie_name)
    if not token:
        raise UnauthorizedError()

    try:
        payload = jwt.decode(
            token,
            settings.auth_secret.get_secret_value(),
            algorithms=["HS256"],
            audience=settings.auth_audience,
            issuer=settings.auth_issuer,
            options={"require": ["exp", "sub"]},
        )
        return uuid.UUID(payload["sub"])
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        # Security: never tell the client WHY the token was rejected.
        logger.info("Rejected session token", reason=type(exc).__name__)
        raise UnauthorizedError() from exc


CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


async def get_current_profile(user_id: CurrentUserId, db: DbSession) -> AccountProfile:
    """Load the cached account profile of the current user.

    Raises:
        UnauthorizedError: If no profile row exists (deleted account, bad id).
    """
    profile = await AccountProfileRepository.get_by_id(db, user_id)
    if profile is None:
        raise UnauthorizedError()
    return profile


CurrentProfile = Annotated[AccountProfile, Depends(get_current_profile)]


def require_role(profile: AccountProfile, role: str) -> None:
    """Raise ForbiddenError unless the profile has the given role."""
    if profile.role != role:
        raise ForbiddenError(f"This action requires the {role} role")


def get_object_store(db: DbSession) -> ObjectStore:
    """Object store bound to the request's database session."""
    return DatabaseObjectStore(db)


Store = Annotated[ObjectStore, Depends(get_object_store)]
Registry = Annotated[WizardSessionRegistry, Depends(get_registry)]
