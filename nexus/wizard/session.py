"""One in-flight wizard instance.

WizardSession owns the working state of a flow for one owner from mount to
submission or discard. Nothing is persisted until the final step submits;
discarding a session drops every edit.

Late results:
    Every discard bumps `generation`. A load or submission started under an
    older generation finishes without touching the session.

Submission:
    Advancing (or skipping) from the last step triggers exactly one
    submission attempt. While it runs, further navigation and edits are
    refused. On success the session closes; on failure the working state and
    pending uploads stay so the user can retry.
"""

import logging
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from nexus.core.errors import InvalidStateError
from nexus.services.object_storage import PendingUpload
from nexus.wizard import fields as edits
from nexus.wizard.fields import FieldKind, FieldSpec, InvalidFieldEditError
from nexus.wizard.flow import FlowContext, FlowDefinition
from nexus.wizard.sequencer import (
    StepSequencer,
    Transition,
    WizardState,
    WizardStep,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmissionOutcome:
    """Result of a submission attempt."""

    ok: bool
    message: str
    redirect: str | None = None


@dataclass(frozen=True)
class NavigationResult:
    """Result of advance / skip / retreat.

    Attributes:
        transition: What the sequencer did.
        outcome: Set when the transition triggered a submission.
    """

    transition: Transition
    outcome: SubmissionOutcome | None = None


class WizardSession:
    """Working state plus pending uploads for one flow run."""

    def __init__(self, flow: FlowDefinition, owner_id: uuid.UUID) -> None:
        self.id = uuid.uuid4()
        self.flow = flow
        self.owner_id = owner_id
        self.sequencer = StepSequencer(flow.steps)
        self.state = self.sequencer.new_state(flow.default_fields())
        self.pending: dict[str, list[PendingUpload]] = {
            name: [] for name in flow.upload_buckets
        }
        self.generation = 0
        self.closed = False
        self.submitting = False
        self.submission_attempts = 0
        self.last_activity = datetime.now(UTC)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def current_step(self) -> WizardStep:
        return self.sequencer.step(self.state)

    def touch(self) -> None:
        self.last_activity = datetime.now(UTC)

    def discard(self) -> None:
        """Drop the session; results still in flight become no-ops."""
        self.generation += 1
        self.closed = True

    async def load(self, ctx: FlowContext) -> None:
        """Merge the owner's stored record into working state.

        Fail-open: if the fetch fails the flow starts from defaults.
        """
        generation = self.generation
        try:
            overrides = await self.flow.load(ctx)
        except Exception:  # noqa: BLE001 - never block onboarding on a bad read
            logger.warning(
                "Loading %s profile for %s failed; starting from defaults",
                self.flow.name,
                self.owner_id,
                exc_info=True,
            )
            await ctx.db.rollback()
            overrides = {}

        if generation != self.generation:
            return
        self.state.fields.update(overrides)
        self.state.loading = False

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    async def advance(self, ctx: FlowContext) -> NavigationResult:
        self._ensure_open()
        return await self._navigate(self.sequencer.advance, ctx)

    async def skip(self, ctx: FlowContext) -> NavigationResult:
        self._ensure_open()
        return await self._navigate(self.sequencer.skip, ctx)

    def retreat(self) -> NavigationResult:
        self._ensure_open()
        if self.submitting:
            return NavigationResult(Transition.BLOCKED)
        self.touch()
        return NavigationResult(self.sequencer.retreat(self.state))

    async def _navigate(
        self, move: Callable[[WizardState], Transition], ctx: FlowContext
    ) -> NavigationResult:
        if self.submitting:
            return NavigationResult(Transition.BLOCKED)
        self.touch()
        transition = move(self.state)
        if transition is not Transition.SUBMIT:
            return NavigationResult(transition)
        return NavigationResult(transition, await self._submit(ctx))

    async def _submit(self, ctx: FlowContext) -> SubmissionOutcome:
        generation = self.generation
        self.submitting = True
        self.submission_attempts += 1
        try:
            await self.flow.submit(ctx, self.state.fields, self.pending)
        except Exception:
            logger.exception(
                "Saving %s profile for %s failed", self.flow.name, self.owner_id
            )
            await ctx.db.rollback()
            outcome = SubmissionOutcome(ok=False, message="Error saving profile")
        else:
            outcome = SubmissionOutcome(
                ok=True,
                message=self.flow.success_message,
                redirect=self.flow.redirect,
            )
        finally:
            self.submitting = False

        if generation == self.generation and outcome.ok:
            self.discard()
        return outcome

    # -------------------------------------------------------------------------
    # Field edits
    # -------------------------------------------------------------------------

    def set_field(self, name: str, value: Any) -> None:
        spec = self._spec(name, FieldKind.TEXT, FieldKind.CHOICE, FieldKind.TEXT_LIST)
        if spec.kind is FieldKind.TEXT_LIST:
            self._write(name, edits.set_text_list(spec, value))
        else:
            self._write(name, edits.set_text(spec, value))

    def toggle(self, name: str, value: str) -> None:
        spec = self._spec(name, FieldKind.MULTI_SELECT, FieldKind.SKILLS)
        self._write(name, edits.toggle_choice(spec, self.state.fields[name], value))

    def toggle_availability(self, day: str, slot: str) -> None:
        self._spec("availability", FieldKind.AVAILABILITY)
        grid = self.state.fields["availability"]
        self._write("availability", edits.toggle_availability(grid, day, slot))

    def choose_prompt(self, index: int, prompt: str) -> None:
        self._spec("prompts", FieldKind.PROMPTS)
        prompts = self.state.fields["prompts"]
        self._write("prompts", edits.choose_prompt(prompts, index, prompt))

    def answer_prompt(self, index: int, answer: str) -> None:
        self._spec("prompts", FieldKind.PROMPTS)
        prompts = self.state.fields["prompts"]
        self._write("prompts", edits.answer_prompt(prompts, index, answer))

    def add_entry(self, name: str) -> None:
        spec = self._spec(name, FieldKind.ENTRIES)
        self._write(name, edits.add_entry(spec, self.state.fields[name]))

    def update_entry(self, name: str, index: int, changes: Mapping[str, Any]) -> None:
        spec = self._spec(name, FieldKind.ENTRIES)
        self._write(name, edits.update_entry(spec, self.state.fields[name], index, changes))

    def remove_entry(self, name: str, index: int) -> None:
        spec = self._spec(name, FieldKind.ENTRIES)
        self._write(name, edits.remove_entry(spec, self.state.fields[name], index))

    def add_skill(self, skill: str) -> None:
        self._spec("skills", FieldKind.SKILLS)
        self._write("skills", edits.add_skill(self.state.fields["skills"], skill))

    def remove_skill(self, skill: str) -> None:
        self._spec("skills", FieldKind.SKILLS)
        self._write("skills", edits.remove_skill(self.state.fields["skills"], skill))

    def photo_count(self) -> int:
        return len(self.state.fields["photos"]) + len(self.pending["photos"])

    def remove_photo(self, index: int) -> None:
        """Remove a photo by position across kept URLs, then pending files."""
        self._spec("photos", FieldKind.PHOTOS)
        kept = self.state.fields["photos"]
        if not 0 <= index < self.photo_count():
            raise InvalidFieldEditError("photos", f"Photo {index} does not exist")
        if index < len(kept):
            self._write("photos", [url for i, url in enumerate(kept) if i != index])
        else:
            del self.pending["photos"][index - len(kept)]

    def attach_upload(self, name: str, upload: PendingUpload) -> bool:
        """Queue a validated file for upload on submission.

        Photos accumulate up to the cap (a full set ignores further files);
        single-file fields replace any previously attached file.

        Returns:
            True if the file was queued.
        """
        spec = self._spec(name, FieldKind.PHOTOS, FieldKind.FILE)
        if spec.kind is FieldKind.PHOTOS:
            if spec.cap is not None and self.photo_count() >= spec.cap:
                return False
            self.pending[name].append(upload)
        else:
            self.pending[name] = [upload]
        self.touch()
        return True

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _ensure_open(self) -> None:
        if self.closed:
            raise InvalidStateError("This profile flow has already finished")

    def _spec(self, name: str, *kinds: FieldKind) -> FieldSpec:
        self._ensure_open()
        if self.state.loading:
            raise InvalidStateError("Profile is still loading")
        if self.submitting:
            raise InvalidStateError("Profile is being saved")
        spec = self.flow.fields.get(name)
        if spec is None or spec.kind not in kinds:
            raise InvalidFieldEditError(
                name, f"'{name}' cannot be edited this way in the {self.flow.name} flow"
            )
        return spec

    def _write(self, name: str, value: Any) -> None:
        self.state.fields[name] = value
        self.touch()
