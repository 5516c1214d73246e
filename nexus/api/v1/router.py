"""API v1 router aggregator.

All v1 endpoint routers are included here, under the /api/v1 prefix.
"""

from fastapi import APIRouter

from nexus.api.v1 import completion, files, profile_flows

router = APIRouter()

# =============================================================================
# Profile flows
# =============================================================================

router.include_router(
    profile_flows.router, prefix="/profile-flows", tags=["profile-flows"]
)
router.include_router(
    completion.router, prefix="/profile-completion", tags=["profile-completion"]
)

# =============================================================================
# Files
# =============================================================================

router.include_router(files.router, prefix="/files", tags=["files"])
