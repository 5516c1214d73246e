"""Tests for merging stored records into fresh working state.

Tests verify:
- Missing records keep defaults
- Array columns load verbatim and malformed values fall back
- Prompts pad to three slots; a stored empty list resets to defaults
- Experience loads only from a non-empty list
- Company location is carried as a whole string
"""

from nexus.wizard.codecs import EducationEntry
from nexus.wizard.fields import ExperienceEntry, PromptAnswer
from nexus.wizard.flows import company, personal, professional
from nexus.wizard.reconcile import (
    load_availability,
    load_list,
    load_prompts,
    load_records,
    load_text,
)

# =============================================================================
# Helpers
# =============================================================================


class TestLoadHelpers:
    """Shape-checking loaders."""

    def test_load_list_drops_non_strings(self) -> None:
        assert load_list(["a", 1, None, "b"]) == ["a", "b"]

    def test_load_list_non_list(self) -> None:
        assert load_list("a,b") == []
        assert load_list(None) == []

    def test_load_text(self) -> None:
        assert load_text("x") == "x"
        assert load_text(None) == ""

    def test_load_availability(self) -> None:
        assert load_availability(["Mon-AM", "Wed-PM"]) == {"Mon-AM": True, "Wed-PM": True}

    def test_load_records_fills_missing_attributes(self) -> None:
        records = load_records([{"title": "Barista", "extra": "x"}], ExperienceEntry)

        assert records == [ExperienceEntry(title="Barista")]

    def test_load_records_empty_is_none(self) -> None:
        assert load_records([], ExperienceEntry) is None
        assert load_records(None, ExperienceEntry) is None

    def test_load_prompts_pads(self) -> None:
        prompts = load_prompts([{"prompt": "p", "answer": "a"}], 3)

        assert prompts == [PromptAnswer("p", "a"), PromptAnswer(), PromptAnswer()]

    def test_load_prompts_truncates(self) -> None:
        stored = [{"prompt": f"p{i}", "answer": "a"} for i in range(5)]

        assert len(load_prompts(stored, 3)) == 3


# =============================================================================
# Personal
# =============================================================================


class TestPersonalMerge:
    """Personal flow merge rules."""

    def test_no_record_keeps_defaults_and_takes_account_location(self) -> None:
        assert personal.merge_record(None, "Austin, TX") == {"location": "Austin, TX"}

    def test_arrays_load_verbatim(self) -> None:
        record = {
            "photos": ["https://cdn.test/1.jpg"],
            "interests": ["retail", "food"],
            "availability": ["Mon-AM"],
            "transportation": "bus",
            "hobbies": ["Surfing"],
            "quick_facts": [],
            "prompts": None,
        }

        merged = personal.merge_record(record, None)

        assert merged["photos"] == ["https://cdn.test/1.jpg"]
        assert merged["interests"] == ["retail", "food"]
        assert merged["availability"] == {"Mon-AM": True}
        assert merged["transportation"] == "bus"
        assert merged["location"] == ""
        assert "prompts" not in merged

    def test_stored_empty_prompts_reset_to_default_slots(self) -> None:
        merged = personal.merge_record({"prompts": []}, None)
        fields = {**personal.default_fields(), **merged}

        assert fields["prompts"] == [PromptAnswer(), PromptAnswer(), PromptAnswer()]

    def test_stored_prompts_pad_to_three(self) -> None:
        merged = personal.merge_record(
            {"prompts": [{"prompt": "p", "answer": "a"}]}, None
        )

        assert merged["prompts"] == [
            PromptAnswer("p", "a"),
            PromptAnswer(),
            PromptAnswer(),
        ]

    def test_compile_keeps_only_completed_prompts(self) -> None:
        fields = personal.default_fields()
        fields["prompts"] = [PromptAnswer("p", "a"), PromptAnswer("q", ""), PromptAnswer()]
        fields["availability"] = {"Mon-AM": True, "Tue-PM": False}

        record = personal.compile_record(fields, [])

        assert record["prompts"] == [{"prompt": "p", "answer": "a"}]
        assert record["availability"] == ["Mon-AM"]
        assert record["transportation"] is None


# =============================================================================
# Professional
# =============================================================================


class TestProfessionalMerge:
    """Professional flow merge rules."""

    def test_no_record(self) -> None:
        assert professional.merge_record(None) == {}

    def test_decodes_string_packed_columns(self) -> None:
        record = {
            "education": "BSc\nMIT\n2019",
            "achievements": "Won; Led",
            "skills": ["Python", "Kubernetes"],
            "experience": [{"title": "Barista", "company": "Cafe", "duration": "2 years"}],
        }

        merged = professional.merge_record(record)

        assert merged["education"] == [EducationEntry("BSc", "MIT", "2019")]
        assert merged["achievements"] == ["Won", "Led"]
        assert merged["skills"] == ["Python", "Kubernetes"]
        assert merged["experience"] == [
            ExperienceEntry("Barista", "Cafe", "2 years", "")
        ]

    def test_empty_experience_keeps_default(self) -> None:
        assert "experience" not in professional.merge_record({"experience": []})

    def test_compile_derives_experience_years(self) -> None:
        fields = professional.default_fields()
        fields["experience"] = [
            ExperienceEntry("Barista", "Cafe", "2021 - Present"),
            ExperienceEntry("Server", "Diner", "3 years"),
        ]

        record = professional.compile_record(fields, None)

        assert record["experience_years"] == 3
        assert record["portfolio_url"] is None


# =============================================================================
# Company
# =============================================================================


class TestCompanyMerge:
    """Company flow merge rules."""

    def test_no_record(self) -> None:
        assert company.merge_record(None) == {}

    def test_location_is_carried_whole(self) -> None:
        merged = company.merge_record(
            {"name": "Acme", "location": "Austin, TX, USA", "founded_year": 1999}
        )

        assert merged["location"] == "Austin, TX, USA"
        assert merged["founded_year"] == "1999"
        assert "city" not in merged

    def test_compile_keeps_stored_location_without_parts(self) -> None:
        fields = {**company.default_fields(), "name": "Acme", "location": "Austin, TX"}

        assert company.compile_record(fields, None)["location"] == "Austin, TX"

    def test_compile_composes_new_location(self) -> None:
        fields = {
            **company.default_fields(),
            "name": "Acme",
            "city": "Austin",
            "country": "USA",
            "location": "Old Town",
            "founded_year": "2010",
        }

        record = company.compile_record(fields, None)

        assert record["location"] == "Austin, USA"
        assert record["founded_year"] == 2010
