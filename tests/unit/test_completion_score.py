"""Tests for profile completion scoring.

Tests verify:
- A fully filled profile scores 100 and an empty one 0
- Weights add up per check
- Experience counts via entries OR a positive experience_years
- Scores are deterministic
"""

from nexus.services.completion_score import (
    MAX_SCORE,
    PERSONAL_CHECKS,
    PROFESSIONAL_CHECKS,
    personal_completion,
    present,
    professional_completion,
)

_FULL_PERSONAL = {
    "photos": ["https://cdn.test/a.jpg"],
    "interests": ["retail"],
    "availability": ["Mon-AM"],
    "transportation": "car",
    "hobbies": ["Surfing"],
    "quick_facts": ["early-bird", "night-owl", "team-player"],
    "prompts": [{"prompt": "My most used emoji is...", "answer": "🦋"}],
}

_FULL_PROFESSIONAL = {
    "skills": ["Python"],
    "experience": [{"title": "Barista", "company": "Cafe"}],
    "experience_years": 2,
    "education": "BSc\nMIT\n2019",
    "resume_url": "https://cdn.test/resume.pdf",
    "portfolio_url": "https://example.com",
    "linkedin_url": "https://linkedin.com/in/casey",
    "achievements": "Employee of the month",
}


class TestWeights:
    """Check lists are calibrated to MAX_SCORE."""

    def test_personal_weights_sum_to_max(self) -> None:
        assert sum(check.weight for check in PERSONAL_CHECKS) == MAX_SCORE

    def test_professional_weights_sum_to_max(self) -> None:
        assert sum(check.weight for check in PROFESSIONAL_CHECKS) == MAX_SCORE


class TestPresent:
    """Presence rules."""

    def test_empty_values_are_absent(self) -> None:
        assert present(None) is False
        assert present("") is False
        assert present([]) is False

    def test_non_empty_values_are_present(self) -> None:
        assert present("x") is True
        assert present(["x"]) is True
        assert present(0) is True


class TestPersonalCompletion:
    """Personal profile score."""

    def test_full_profile_scores_100(self) -> None:
        assert personal_completion(_FULL_PERSONAL, "Austin, TX") == 100

    def test_missing_location_loses_its_weight(self) -> None:
        assert personal_completion(_FULL_PERSONAL, None) == 95

    def test_no_profile_scores_zero(self) -> None:
        assert personal_completion(None, "Austin, TX") == 0

    def test_partial_profile(self) -> None:
        profile = {"interests": ["retail"], "transportation": "bus", "photos": []}

        assert personal_completion(profile, "") == 25

    def test_is_deterministic(self) -> None:
        scores = {personal_completion(_FULL_PERSONAL, "Austin") for _ in range(5)}

        assert scores == {100}


class TestProfessionalCompletion:
    """Professional profile score."""

    def test_full_profile_scores_100(self) -> None:
        assert professional_completion(_FULL_PROFESSIONAL) == 100

    def test_no_profile_scores_zero(self) -> None:
        assert professional_completion(None) == 0

    def test_experience_years_alone_counts_as_experience(self) -> None:
        assert professional_completion({"experience": [], "experience_years": 3}) == 20

    def test_entries_alone_count_as_experience(self) -> None:
        profile = {"experience": [{"title": "Barista"}], "experience_years": 0}

        assert professional_completion(profile) == 20

    def test_no_experience(self) -> None:
        assert professional_completion({"experience": [], "experience_years": 0}) == 0
