"""Generic step sequencer shared by every profile flow.

A flow is an ordered list of WizardStep definitions. The sequencer moves a
WizardState between positions 1..N:

- advance: gated by the current step's validity predicate; from step N it
  requests submission instead of moving.
- skip: like advance but ignores validity; only offered on skippable steps.
- retreat: moves back one step; does nothing at step 1.

A gated or disallowed move is reported as Transition.BLOCKED with the state
left untouched. The sequencer never raises for navigation.
"""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

FieldValues = Mapping[str, Any]


def always_valid(_fields: FieldValues) -> bool:
    return True


class StepKind(Enum):
    """Render capability of a step: which editor the client shows."""

    PHOTOS = "photos"
    MULTI_SELECT = "multi_select"
    AVAILABILITY = "availability"
    SINGLE_SELECT = "single_select"
    PROMPTS = "prompts"
    ENTRIES = "entries"
    SKILLS = "skills"
    DOCUMENTS = "documents"
    TEXT = "text"
    LOCATION = "location"
    UPLOAD = "upload"


@dataclass(frozen=True)
class WizardStep:
    """Static definition of one step in a flow.

    Attributes:
        position: 1-based position in the flow.
        key: Stable identifier (e.g. "interests").
        kind: Render capability tag.
        title: Step heading.
        description: Step sub-heading.
        fields: Working-state fields edited on this step.
        is_valid: Predicate over current field values gating advance.
        skippable: Whether skip is offered on this step.
    """

    position: int
    key: str
    kind: StepKind
    title: str
    description: str
    fields: tuple[str, ...] = ()
    is_valid: Callable[[FieldValues], bool] = always_valid
    skippable: bool = True


@dataclass
class WizardState:
    """Mutable in-flight state of one wizard instance.

    Invariant: 1 <= current_step <= total_steps.
    """

    total_steps: int
    fields: dict[str, Any] = field(default_factory=dict)
    current_step: int = 1
    loading: bool = True

    def __post_init__(self) -> None:
        if self.total_steps < 1:
            raise ValueError("A flow needs at least one step")
        if not 1 <= self.current_step <= self.total_steps:
            raise ValueError(
                f"current_step {self.current_step} outside 1..{self.total_steps}"
            )

    @property
    def progress_percent(self) -> int:
        return round(self.current_step / self.total_steps * 100)


class Transition(Enum):
    """Result of a navigation request."""

    MOVED = "moved"
    BLOCKED = "blocked"
    SUBMIT = "submit"


class StepSequencer:
    """Navigation rules for one flow's step list."""

    def __init__(self, steps: Sequence[WizardStep]) -> None:
        positions = [step.position for step in steps]
        if positions != list(range(1, len(steps) + 1)):
            raise ValueError(f"Step positions must be 1..{len(steps)}, got {positions}")
        self._steps = tuple(steps)

    @property
    def steps(self) -> tuple[WizardStep, ...]:
        return self._steps

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    def step(self, state: WizardState) -> WizardStep:
        """Definition of the state's current step."""
        return self._steps[state.current_step - 1]

    def new_state(self, fields: dict[str, Any]) -> WizardState:
        return WizardState(total_steps=self.total_steps, fields=fields)

    # -------------------------------------------------------------------------
    # Affordances
    # -------------------------------------------------------------------------

    def can_advance(self, state: WizardState) -> bool:
        return not state.loading and self.step(state).is_valid(state.fields)

    def can_skip(self, state: WizardState) -> bool:
        return not state.loading and self.step(state).skippable

    def can_retreat(self, state: WizardState) -> bool:
        return not state.loading and state.current_step > 1

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def advance(self, state: WizardState) -> Transition:
        if not self.can_advance(state):
            return Transition.BLOCKED
        return self._forward(state)

    def skip(self, state: WizardState) -> Transition:
        if not self.can_skip(state):
            return Transition.BLOCKED
        return self._forward(state)

    def retreat(self, state: WizardState) -> Transition:
        if not self.can_retreat(state):
            return Transition.BLOCKED
        state.current_step -= 1
        return Transition.MOVED

    def _forward(self, state: WizardState) -> Transition:
        if state.current_step < self.total_steps:
            state.current_step += 1
            return Transition.MOVED
        return Transition.SUBMIT
