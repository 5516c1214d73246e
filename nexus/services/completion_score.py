"""Profile completion scoring.

Scores a stored profile 0-100 from a fixed list of weighted presence
checks. Drives dashboard progress bars and "complete your profile" prompts;
nothing else is gated on it.

Presence:
- lists: non-empty
- scalars: not None and not ""
- experience: experience list non-empty OR experience_years > 0

Personal checks read candidate_profiles except location, which comes from
the account profile.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

MAX_SCORE = 100

Record = Mapping[str, Any]


@dataclass(frozen=True)
class WeightedCheck:
    """One scored criterion."""

    name: str
    weight: int
    is_present: Callable[[Record], bool]


def present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str | list | tuple | dict | set):
        return len(value) > 0
    return True


def _field(name: str) -> Callable[[Record], bool]:
    return lambda record: present(record.get(name))


def _has_experience(record: Record) -> bool:
    years = record.get("experience_years")
    return present(record.get("experience")) or (
        isinstance(years, int) and years > 0
    )


PERSONAL_CHECKS: tuple[WeightedCheck, ...] = (
    WeightedCheck("photos", 15, _field("photos")),
    WeightedCheck("interests", 15, _field("interests")),
    WeightedCheck("availability", 15, _field("availability")),
    WeightedCheck("transportation", 10, _field("transportation")),
    WeightedCheck("hobbies", 15, _field("hobbies")),
    WeightedCheck("quick_facts", 10, _field("quick_facts")),
    WeightedCheck("prompts", 15, _field("prompts")),
    WeightedCheck("location", 5, _field("location")),
)

PROFESSIONAL_CHECKS: tuple[WeightedCheck, ...] = (
    WeightedCheck("skills", 20, _field("skills")),
    WeightedCheck("experience", 20, _has_experience),
    WeightedCheck("education", 15, _field("education")),
    WeightedCheck("resume", 15, _field("resume_url")),
    WeightedCheck("portfolio", 10, _field("portfolio_url")),
    WeightedCheck("linkedin", 10, _field("linkedin_url")),
    WeightedCheck("achievements", 10, _field("achievements")),
)


def score(record: Record | None, checks: tuple[WeightedCheck, ...]) -> int:
    """Sum the weights of the checks that pass, capped at MAX_SCORE."""
    if not record:
        return 0
    total = sum(check.weight for check in checks if check.is_present(record))
    return min(total, MAX_SCORE)


def personal_completion(
    profile: Record | None, account_location: str | None = None
) -> int:
    """Personal profile score.

    Args:
        profile: candidate_profiles row as a mapping, or None.
        account_location: Location from the account profile.

    Returns:
        Integer 0-100; 0 when there is no candidate profile yet.
    """
    if profile is None:
        return 0
    return score({**profile, "location": account_location}, PERSONAL_CHECKS)


def professional_completion(profile: Record | None) -> int:
    """Professional profile score (integer 0-100)."""
    return score(profile, PROFESSIONAL_CHECKS)
