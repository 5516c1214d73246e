"""Field definitions and pure edit operations for wizard working state.

Every edit returns a new value rather than mutating its input, so a rejected
edit can never leave a field half-changed. Edits that cannot apply raise
InvalidFieldEditError; capped selections that are already full are silently
left unchanged, matching a disabled control.
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, TypeVar

from nexus.core.errors import ValidationError
from nexus.wizard.catalogs import DAYS_OF_WEEK, PERSONALITY_PROMPTS, TIME_SLOTS

PROMPT_ANSWER_MAX_LENGTH = 150

EntryT = TypeVar("EntryT")


class InvalidFieldEditError(ValidationError):
    """A field edit referenced an unknown field, value, or position."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(
            message=message,
            details=[{"field": field, "error": "INVALID_FIELD_EDIT"}],
        )


class FieldKind(Enum):
    """How a working-state field is edited."""

    TEXT = "text"
    CHOICE = "choice"
    MULTI_SELECT = "multi_select"
    AVAILABILITY = "availability"
    PROMPTS = "prompts"
    ENTRIES = "entries"
    SKILLS = "skills"
    TEXT_LIST = "text_list"
    PHOTOS = "photos"
    FILE = "file"


@dataclass(frozen=True)
class FieldSpec:
    """Static description of one editable field.

    Attributes:
        name: Key in the working-state field mapping.
        kind: Edit semantics.
        choices: Allowed values for CHOICE / MULTI_SELECT fields.
        cap: Maximum selection size (MULTI_SELECT, PHOTOS).
        max_length: Maximum text length (TEXT).
        digits_only: TEXT field accepts only digits (e.g. a year).
        entry_type: Record dataclass for ENTRIES fields.
    """

    name: str
    kind: FieldKind
    choices: tuple[str, ...] = ()
    cap: int | None = None
    max_length: int | None = None
    digits_only: bool = False
    entry_type: type | None = None


@dataclass
class ExperienceEntry:
    """One work experience record in the professional flow."""

    title: str = ""
    company: str = ""
    duration: str = ""
    description: str = ""


@dataclass
class PromptAnswer:
    """One personality prompt slot."""

    prompt: str = ""
    answer: str = ""


# =============================================================================
# Scalars
# =============================================================================


def set_text(spec: FieldSpec, value: Any) -> str:
    """Validate a free-text or single-choice value."""
    if not isinstance(value, str):
        raise InvalidFieldEditError(spec.name, f"'{spec.name}' must be a string")
    if spec.kind is FieldKind.CHOICE and value and value not in spec.choices:
        raise InvalidFieldEditError(spec.name, f"'{value}' is not a valid {spec.name}")
    if spec.max_length is not None and len(value) > spec.max_length:
        raise InvalidFieldEditError(
            spec.name,
            f"'{spec.name}' must be at most {spec.max_length} characters",
        )
    if spec.digits_only and value and not value.isdigit():
        raise InvalidFieldEditError(spec.name, f"'{spec.name}' must be a number")
    return value


def set_text_list(spec: FieldSpec, value: Any) -> list[str]:
    """Validate a list of free-text items."""
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidFieldEditError(spec.name, f"'{spec.name}' must be a list of strings")
    return list(value)


# =============================================================================
# Capped multi-select
# =============================================================================


def toggle_capped(selected: Sequence[str], item: str, cap: int | None) -> list[str]:
    """Toggle item in a selection limited to cap entries.

    Removes the item if present; otherwise adds it when there is room.
    A full selection is returned unchanged.

    Args:
        selected: Current selection, in selection order.
        item: Value being toggled.
        cap: Maximum size, or None for no limit.

    Returns:
        New selection list.
    """
    if item in selected:
        return [value for value in selected if value != item]
    if cap is not None and len(selected) >= cap:
        return list(selected)
    return [*selected, item]


def toggle_choice(spec: FieldSpec, selected: Sequence[str], item: str) -> list[str]:
    """Catalog-checked toggle for MULTI_SELECT fields."""
    if spec.choices and item not in spec.choices:
        raise InvalidFieldEditError(spec.name, f"'{item}' is not a valid {spec.name} option")
    return toggle_capped(selected, item, spec.cap)


# =============================================================================
# Availability grid
# =============================================================================


def availability_key(day: str, slot: str) -> str:
    """Build the stored "{day}-{slot}" key, e.g. "Mon-AM"."""
    if day not in DAYS_OF_WEEK or slot not in TIME_SLOTS:
        raise InvalidFieldEditError("availability", f"Unknown availability slot '{day}-{slot}'")
    return f"{day}-{slot}"


def toggle_availability(grid: Mapping[str, bool], day: str, slot: str) -> dict[str, bool]:
    """Flip one day/slot cell of the availability grid."""
    key = availability_key(day, slot)
    updated = dict(grid)
    updated[key] = not grid.get(key, False)
    return updated


def availability_from_keys(keys: Iterable[str]) -> dict[str, bool]:
    """Expand stored availability keys into the working grid."""
    return {key: True for key in keys}


def availability_to_keys(grid: Mapping[str, bool]) -> list[str]:
    """Collapse the working grid to the stored key list, in toggle order."""
    return [key for key, available in grid.items() if available]


# =============================================================================
# Personality prompts
# =============================================================================


def _check_slot(prompts: Sequence[PromptAnswer], index: int) -> None:
    if not 0 <= index < len(prompts):
        raise InvalidFieldEditError("prompts", f"Prompt slot {index} does not exist")


def used_prompts(prompts: Sequence[PromptAnswer], *, excluding: int | None = None) -> set[str]:
    """Prompts chosen in any slot other than `excluding`."""
    return {
        slot.prompt
        for position, slot in enumerate(prompts)
        if slot.prompt and position != excluding
    }


def available_prompts(prompts: Sequence[PromptAnswer], index: int) -> dict[str, list[str]]:
    """Prompts selectable in slot `index`, grouped by category.

    A prompt chosen in another slot is not offered; the slot's own current
    prompt is.
    """
    _check_slot(prompts, index)
    taken = used_prompts(prompts, excluding=index)
    return {
        category: [prompt for prompt in options if prompt not in taken]
        for category, options in PERSONALITY_PROMPTS.items()
    }


def choose_prompt(
    prompts: Sequence[PromptAnswer], index: int, prompt: str
) -> list[PromptAnswer]:
    """Select the prompt for one slot, keeping its answer.

    Raises:
        InvalidFieldEditError: Unknown slot, prompt outside the catalog, or a
            prompt already chosen in another slot.
    """
    _check_slot(prompts, index)
    catalog = {p for options in PERSONALITY_PROMPTS.values() for p in options}
    if prompt not in catalog:
        raise InvalidFieldEditError("prompts", "Unknown prompt")
    if prompt in used_prompts(prompts, excluding=index):
        raise InvalidFieldEditError("prompts", "Prompt already chosen in another slot")

    updated = list(prompts)
    updated[index] = replace(prompts[index], prompt=prompt)
    return updated


def answer_prompt(
    prompts: Sequence[PromptAnswer], index: int, answer: str
) -> list[PromptAnswer]:
    """Set the answer text for a slot that already has a prompt.

    Raises:
        InvalidFieldEditError: Unknown slot, no prompt chosen yet, or an answer
            longer than PROMPT_ANSWER_MAX_LENGTH.
    """
    _check_slot(prompts, index)
    if not prompts[index].prompt:
        raise InvalidFieldEditError("prompts", "Choose a prompt before answering it")
    if len(answer) > PROMPT_ANSWER_MAX_LENGTH:
        raise InvalidFieldEditError(
            "prompts",
            f"Answers must be at most {PROMPT_ANSWER_MAX_LENGTH} characters",
        )

    updated = list(prompts)
    updated[index] = replace(prompts[index], answer=answer)
    return updated


def completed_prompts(prompts: Sequence[PromptAnswer]) -> list[PromptAnswer]:
    """Slots with both a prompt and an answer; only these are stored."""
    return [slot for slot in prompts if slot.prompt and slot.answer]


# =============================================================================
# Repeatable entries
# =============================================================================


def _check_entry(spec: FieldSpec, entries: Sequence[Any], index: int) -> None:
    if not 0 <= index < len(entries):
        raise InvalidFieldEditError(spec.name, f"{spec.name} entry {index} does not exist")


def add_entry(spec: FieldSpec, entries: Sequence[EntryT]) -> list[EntryT]:
    """Append a blank record."""
    if spec.entry_type is None:
        raise InvalidFieldEditError(spec.name, f"'{spec.name}' has no entries")
    return [*entries, spec.entry_type()]


def update_entry(
    spec: FieldSpec,
    entries: Sequence[EntryT],
    index: int,
    changes: Mapping[str, Any],
) -> list[EntryT]:
    """Apply a partial update to one record.

    Raises:
        InvalidFieldEditError: Unknown index, unknown attribute, or a
            non-string value.
    """
    _check_entry(spec, entries, index)
    allowed = {f.name for f in fields(entries[index])}  # type: ignore[arg-type]
    unknown = set(changes) - allowed
    if unknown:
        raise InvalidFieldEditError(
            spec.name, f"Unknown {spec.name} attributes: {', '.join(sorted(unknown))}"
        )
    if not all(isinstance(value, str) for value in changes.values()):
        raise InvalidFieldEditError(spec.name, f"{spec.name} attributes must be strings")

    updated = list(entries)
    updated[index] = replace(entries[index], **changes)  # type: ignore[type-var]
    return updated


def remove_entry(spec: FieldSpec, entries: Sequence[EntryT], index: int) -> list[EntryT]:
    """Drop one record by position."""
    _check_entry(spec, entries, index)
    return [entry for position, entry in enumerate(entries) if position != index]


# =============================================================================
# Skills
# =============================================================================


def add_skill(skills: Sequence[str], raw: str) -> list[str]:
    """Add a user-typed skill; blank or duplicate input leaves skills unchanged."""
    skill = raw.strip()
    if not skill or skill in skills:
        return list(skills)
    return [*skills, skill]


def remove_skill(skills: Sequence[str], skill: str) -> list[str]:
    return [value for value in skills if value != skill]
