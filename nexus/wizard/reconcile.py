"""Merge rules from a stored record into fresh working state.

Each helper takes the raw stored value (which may be missing or of the wrong
shape) and returns the working-state value, falling back to the default.
Nothing here touches the database.
"""

from dataclasses import fields
from typing import Any, TypeVar

from nexus.wizard.fields import PromptAnswer, availability_from_keys

T = TypeVar("T")


def load_list(value: Any) -> list[str]:
    """Array columns load verbatim; anything else becomes []."""
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def load_text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def load_availability(value: Any) -> dict[str, bool]:
    """Stored "{day}-{slot}" keys expand to a grid of present keys."""
    return availability_from_keys(load_list(value))


def load_records(value: Any, record_type: type[T]) -> list[T] | None:
    """Decode a stored list of objects into records.

    Returns None unless the value is a non-empty list, so the caller keeps
    its default. Missing attributes become "".
    """
    if not isinstance(value, list) or not value:
        return None

    attributes_allowed = {f.name for f in fields(record_type)}  # type: ignore[arg-type]
    records = []
    for item in value:
        if not isinstance(item, dict):
            continue
        attributes = {
            key: item_value if isinstance(item_value, str) else str(item_value)
            for key, item_value in item.items()
            if key in attributes_allowed and item_value is not None
        }
        records.append(record_type(**attributes))
    return records or None


def load_prompts(value: Any, slots: int) -> list[PromptAnswer] | None:
    """Stored prompt/answer pairs, padded with blanks up to `slots`.

    Returns None when the stored value is not a non-empty list; a stored
    empty list therefore resets to the default blank slots.
    """
    prompts = load_records(value, PromptAnswer)
    if prompts is None:
        return None
    prompts = prompts[:slots]
    return prompts + [PromptAnswer() for _ in range(slots - len(prompts))]
