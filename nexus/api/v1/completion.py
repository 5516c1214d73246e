"""Profile completion API router.

Dashboard progress for the current candidate's personal and professional
profiles.
"""

from fastapi import APIRouter

from nexus.api.deps import CurrentProfile, DbSession, require_role
from nexus.core.responses import DataResponse
from nexus.models import ROLE_CANDIDATE
from nexus.repositories.candidate_profile_repository import CandidateProfileRepository
from nexus.schemas.profile_flow import CompletionView
from nexus.services.completion_score import (
    MAX_SCORE,
    personal_completion,
    professional_completion,
)

router = APIRouter()


@router.get("")
async def get_profile_completion(
    profile: CurrentProfile,
    db: DbSession,
) -> DataResponse[CompletionView]:
    """Completion scores (0-100) of the current candidate's profiles.

    Args:
        profile: Current account profile (injected).
        db: Database session (injected).

    Returns:
        DataResponse with both scores and "needs completing" flags.

    Raises:
        ForbiddenError: If the user is not a candidate.
    """
    require_role(profile, ROLE_CANDIDATE)

    candidate = await CandidateProfileRepository.get_by_user_id(db, profile.id)
    record = candidate.as_record() if candidate else None

    personal = personal_completion(record, profile.location)
    professional = professional_completion(record)
    return DataResponse(
        data=CompletionView(
            personal=personal,
            professional=professional,
            needs_personal=personal < MAX_SCORE,
            needs_professional=professional < MAX_SCORE,
        )
    )
