"""Profile flow API request/response schemas.

Field edits are a discriminated union on `op`; each variant carries only the
parameters that edit needs. All request schemas use
ConfigDict(extra="forbid") to reject unexpected fields.
"""

import uuid
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

_MAX_TEXT_LENGTH = 5000
_MAX_NAME_LENGTH = 100


class _EditBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


# =============================================================================
# Field edits
# =============================================================================


class SetFieldEdit(_EditBase):
    """Replace a text, single-choice, or text-list field."""

    op: Literal["set"]
    field: str = Field(max_length=_MAX_NAME_LENGTH)
    value: str | list[str]


class ToggleEdit(_EditBase):
    """Toggle one option of a multi-select or skills field."""

    op: Literal["toggle"]
    field: str = Field(max_length=_MAX_NAME_LENGTH)
    value: str = Field(max_length=_MAX_NAME_LENGTH)


class ToggleAvailabilityEdit(_EditBase):
    op: Literal["toggle_availability"]
    day: str = Field(max_length=3)
    slot: str = Field(max_length=3)


class ChoosePromptEdit(_EditBase):
    op: Literal["choose_prompt"]
    index: int = Field(ge=0)
    prompt: str = Field(max_length=200)


class AnswerPromptEdit(_EditBase):
    op: Literal["answer_prompt"]
    index: int = Field(ge=0)
    answer: str = Field(max_length=_MAX_TEXT_LENGTH)


class AddEntryEdit(_EditBase):
    op: Literal["add_entry"]
    field: str = Field(max_length=_MAX_NAME_LENGTH)


class UpdateEntryEdit(_EditBase):
    op: Literal["update_entry"]
    field: str = Field(max_length=_MAX_NAME_LENGTH)
    index: int = Field(ge=0)
    changes: dict[str, str]


class RemoveEntryEdit(_EditBase):
    op: Literal["remove_entry"]
    field: str = Field(max_length=_MAX_NAME_LENGTH)
    index: int = Field(ge=0)


class AddSkillEdit(_EditBase):
    op: Literal["add_skill"]
    skill: str = Field(max_length=_MAX_NAME_LENGTH)


class RemoveSkillEdit(_EditBase):
    op: Literal["remove_skill"]
    skill: str = Field(max_length=_MAX_NAME_LENGTH)


class RemovePhotoEdit(_EditBase):
    op: Literal["remove_photo"]
    index: int = Field(ge=0)


FieldEdit = Annotated[
    SetFieldEdit
    | ToggleEdit
    | ToggleAvailabilityEdit
    | ChoosePromptEdit
    | AnswerPromptEdit
    | AddEntryEdit
    | UpdateEntryEdit
    | RemoveEntryEdit
    | AddSkillEdit
    | RemoveSkillEdit
    | RemovePhotoEdit,
    Field(discriminator="op"),
]


# =============================================================================
# Views
# =============================================================================


class StepView(BaseModel):
    """The current step's static definition."""

    position: int
    key: str
    kind: str
    title: str
    description: str
    fields: list[str]
    skippable: bool


class WizardView(BaseModel):
    """Read of a session: current step, affordances, and field values.

    Attributes:
        prompt_options: Per prompt slot, the prompts still selectable there,
            grouped by category (personal flow only).
        skill_categories: Display category of each selected skill
            (professional flow only).
    """

    session_id: uuid.UUID
    flow: str
    title: str
    current_step: int
    total_steps: int
    progress_percent: int
    loading: bool
    step: StepView
    can_advance: bool
    can_retreat: bool
    can_skip: bool
    fields: dict[str, Any]
    pending_uploads: dict[str, list[str]]
    prompt_options: list[dict[str, list[str]]] | None = None
    skill_categories: dict[str, str] | None = None


class NavigationResponse(BaseModel):
    """Result of advance / retreat / skip.

    `session` is omitted once the flow has been submitted.
    """

    status: Literal["moved", "blocked", "submitted"]
    message: str | None = None
    redirect: str | None = None
    session: WizardView | None = None


class CompletionView(BaseModel):
    """Profile completion scores for the current candidate."""

    personal: int
    professional: int
    needs_personal: bool
    needs_professional: bool
