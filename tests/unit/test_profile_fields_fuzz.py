"""Property-based tests for wizard field edits and stored encodings.

Uses Hypothesis to check invariants that must hold for ANY edit sequence or
field text, not just hand-picked examples. These complement the example-based
tests in test_wizard_fields.py and test_codecs.py.
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from nexus.wizard.catalogs import GENERAL_INTERESTS, PERSONALITY_PROMPTS
from nexus.wizard.codecs import (
    EducationEntry,
    decode_achievements,
    decode_education,
    encode_achievements,
    encode_education,
)
from nexus.wizard.fields import (
    InvalidFieldEditError,
    PromptAnswer,
    available_prompts,
    choose_prompt,
    toggle_capped,
)

# =============================================================================
# Strategies
# =============================================================================

_ALL_PROMPTS = [prompt for options in PERSONALITY_PROMPTS.values() for prompt in options]
_PROMPT_SLOTS = 3

# Free text biased toward the characters the encodings treat specially
field_text = st.text(
    alphabet=st.one_of(
        st.sampled_from(["\n", "\\", ";", " ", "e", "n"]),
        st.characters(blacklist_categories=("Cs",)),
    ),
    max_size=30,
)

education_entries = st.lists(
    st.builds(EducationEntry, degree=field_text, school=field_text, year=field_text),
    max_size=5,
)

toggle_sequences = st.lists(st.sampled_from(GENERAL_INTERESTS), max_size=60)

prompt_choices = st.lists(
    st.tuples(st.integers(0, _PROMPT_SLOTS - 1), st.sampled_from(_ALL_PROMPTS)),
    max_size=30,
)


def _apply_choices(choices: list[tuple[int, str]]) -> list[PromptAnswer]:
    """Apply each choice in turn, skipping the ones the edit rejects."""
    prompts = [PromptAnswer() for _ in range(_PROMPT_SLOTS)]
    for index, prompt in choices:
        try:
            prompts = choose_prompt(prompts, index, prompt)
        except InvalidFieldEditError:
            continue
    return prompts


# =============================================================================
# Property Tests: capped selections
# =============================================================================


class TestToggleCappedProperties:
    """Invariants for capped multi-select toggles."""

    @given(toggle_sequences, st.integers(min_value=1, max_value=10))
    @settings(max_examples=300)
    def test_cap_holds_for_any_sequence(self, items: list[str], cap: int) -> None:
        selected: list[str] = []
        for item in items:
            selected = toggle_capped(selected, item, cap)
            assert len(selected) <= cap
            assert len(set(selected)) == len(selected)

    @given(toggle_sequences, st.sampled_from(GENERAL_INTERESTS))
    @settings(max_examples=300)
    def test_full_selection_ignores_new_items(self, items: list[str], extra: str) -> None:
        """Once at the cap, toggling an unselected item changes nothing."""
        selected: list[str] = []
        for item in items:
            selected = toggle_capped(selected, item, 3)

        if len(selected) == 3 and extra not in selected:
            assert toggle_capped(selected, extra, 3) == selected


# =============================================================================
# Property Tests: personality prompts
# =============================================================================


class TestPromptProperties:
    """Invariants for prompt selection across slots."""

    @given(prompt_choices)
    @settings(max_examples=300)
    def test_chosen_prompts_stay_unique(self, choices: list[tuple[int, str]]) -> None:
        prompts = _apply_choices(choices)

        chosen = [slot.prompt for slot in prompts if slot.prompt]
        assert len(set(chosen)) == len(chosen)

    @given(prompt_choices, st.integers(0, _PROMPT_SLOTS - 1))
    @settings(max_examples=300)
    def test_options_exclude_other_slots(
        self, choices: list[tuple[int, str]], index: int
    ) -> None:
        prompts = _apply_choices(choices)

        offered = {p for options in available_prompts(prompts, index).values() for p in options}
        for position, slot in enumerate(prompts):
            if position != index and slot.prompt:
                assert slot.prompt not in offered
        if prompts[index].prompt:
            assert prompts[index].prompt in offered


# =============================================================================
# Property Tests: stored encodings
# =============================================================================


class TestEncodingProperties:
    """Round-trip invariants for the string-packed columns."""

    @given(education_entries)
    @settings(max_examples=500)
    def test_education_round_trip_is_lossless(self, entries: list[EducationEntry]) -> None:
        """Every non-blank entry comes back exactly, in order."""
        expected = [entry for entry in entries if not entry.is_blank()]

        assert decode_education(encode_education(entries)) == expected

    @given(st.lists(field_text, max_size=8))
    @settings(max_examples=500)
    def test_achievements_round_trip_trimmed(self, items: list[str]) -> None:
        """Achievements come back trimmed, with empty items dropped."""
        expected = [item.strip() for item in items if item.strip()]

        assert decode_achievements(encode_achievements(items)) == expected
