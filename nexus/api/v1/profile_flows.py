"""Profile flow API router.

Exposes the wizard sessions: mount a flow, read it, edit fields, attach
files, and navigate with advance / retreat / skip. Advancing from the last
step submits the profile.

Sessions are held in memory by the registry; nothing is written to the
profile tables until submission.
"""

import uuid
from dataclasses import asdict, is_dataclass
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Body, File, Response, UploadFile, status

from nexus.api.deps import CurrentProfile, DbSession, Registry, Store, require_role
from nexus.core.errors import ProfileSaveError, ValidationError
from nexus.core.file_validation import (
    IMAGE_MIMES,
    PDF_MIMES,
    read_file_with_size_limit,
    validate_file_content,
)
from nexus.core.responses import DataResponse
from nexus.schemas.profile_flow import (
    AddEntryEdit,
    AddSkillEdit,
    AnswerPromptEdit,
    ChoosePromptEdit,
    FieldEdit,
    NavigationResponse,
    RemoveEntryEdit,
    RemovePhotoEdit,
    RemoveSkillEdit,
    SetFieldEdit,
    StepView,
    ToggleAvailabilityEdit,
    ToggleEdit,
    UpdateEntryEdit,
    WizardView,
)
from nexus.services.object_storage import PendingUpload
from nexus.wizard.catalogs import skill_category
from nexus.wizard.fields import FieldKind, available_prompts
from nexus.wizard.flow import FlowContext
from nexus.wizard.flows import get_flow
from nexus.wizard.registry import WizardSessionRegistry
from nexus.wizard.sequencer import Transition
from nexus.wizard.session import NavigationResult, WizardSession

logger = structlog.get_logger()

router = APIRouter()

_ALLOWED_CONTENT = {"image": IMAGE_MIMES, "pdf": PDF_MIMES}


# =============================================================================
# View helpers
# =============================================================================


def _plain(value: Any) -> Any:
    """Convert working-state values (records, lists, dicts) to JSON types."""
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    return value


def build_view(session: WizardSession) -> WizardView:
    """Snapshot a session for the client."""
    state = session.state
    sequencer = session.sequencer
    step = session.current_step
    fields = state.fields
    flow_fields = session.flow.fields

    prompt_options = None
    if "prompts" in flow_fields and flow_fields["prompts"].kind is FieldKind.PROMPTS:
        prompts = fields["prompts"]
        prompt_options = [available_prompts(prompts, i) for i in range(len(prompts))]

    skill_categories = None
    if "skills" in flow_fields:
        skill_categories = {skill: skill_category(skill) for skill in fields["skills"]}

    return WizardView(
        session_id=session.id,
        flow=session.flow.name,
        title=session.flow.title,
        current_step=state.current_step,
        total_steps=sequencer.total_steps,
        progress_percent=state.progress_percent,
        loading=state.loading,
        step=StepView(
            position=step.position,
            key=step.key,
            kind=step.kind.value,
            title=step.title,
            description=step.description,
            fields=list(step.fields),
            skippable=step.skippable,
        ),
        can_advance=sequencer.can_advance(state),
        can_retreat=sequencer.can_retreat(state),
        can_skip=sequencer.can_skip(state),
        fields=_plain(fields),
        pending_uploads={
            name: [upload.filename for upload in uploads]
            for name, uploads in session.pending.items()
        },
        prompt_options=prompt_options,
        skill_categories=skill_categories,
    )


def _navigation_response(
    session: WizardSession,
    result: NavigationResult,
    registry: WizardSessionRegistry,
) -> DataResponse[NavigationResponse]:
    """Translate a navigation result, raising on a failed submission."""
    outcome = result.outcome
    if outcome is None:
        status_value = "blocked" if result.transition is Transition.BLOCKED else "moved"
        return DataResponse(
            data=NavigationResponse(status=status_value, session=build_view(session))
        )

    if not outcome.ok:
        raise ProfileSaveError()

    registry.forget(session)
    return DataResponse(
        data=NavigationResponse(
            status="submitted",
            message=outcome.message,
            redirect=outcome.redirect,
        )
    )


def apply_edit(session: WizardSession, edit: Any) -> None:
    """Dispatch one field edit to the session."""
    if isinstance(edit, SetFieldEdit):
        session.set_field(edit.field, edit.value)
    elif isinstance(edit, ToggleEdit):
        session.toggle(edit.field, edit.value)
    elif isinstance(edit, ToggleAvailabilityEdit):
        session.toggle_availability(edit.day, edit.slot)
    elif isinstance(edit, ChoosePromptEdit):
        session.choose_prompt(edit.index, edit.prompt)
    elif isinstance(edit, AnswerPromptEdit):
        session.answer_prompt(edit.index, edit.answer)
    elif isinstance(edit, AddEntryEdit):
        session.add_entry(edit.field)
    elif isinstance(edit, UpdateEntryEdit):
        session.update_entry(edit.field, edit.index, edit.changes)
    elif isinstance(edit, RemoveEntryEdit):
        session.remove_entry(edit.field, edit.index)
    elif isinstance(edit, AddSkillEdit):
        session.add_skill(edit.skill)
    elif isinstance(edit, RemoveSkillEdit):
        session.remove_skill(edit.skill)
    elif isinstance(edit, RemovePhotoEdit):
        session.remove_photo(edit.index)
    else:  # pragma: no cover - the union is exhaustive
        raise ValidationError(f"Unsupported edit: {type(edit).__name__}")


# =============================================================================
# Session lifecycle
# =============================================================================


@router.post("/{flow_name}/sessions", status_code=status.HTTP_201_CREATED)
async def start_flow(
    flow_name: str,
    profile: CurrentProfile,
    db: DbSession,
    store: Store,
    registry: Registry,
) -> DataResponse[WizardView]:
    """Mount a profile flow for the current user.

    Discards any open session of the same flow, then merges the stored
    record (if any) into fresh working state. A failed load starts from
    defaults.

    Args:
        flow_name: "personal", "professional" or "company".
        profile: Current account profile (injected).
        db: Database session (injected).
        store: Object store (injected).
        registry: Session registry (injected).

    Returns:
        DataResponse with the new session's view.

    Raises:
        NotFoundError: If the flow does not exist.
        ForbiddenError: If the user's role does not own the flow.
    """
    flow = get_flow(flow_name)
    require_role(profile, flow.owner_role)

    session = registry.open(flow, profile.id)
    await session.load(FlowContext(db=db, owner_id=profile.id, store=store))
    logger.info("Profile flow started", flow=flow.name, session_id=str(session.id))
    return DataResponse(data=build_view(session))


@router.get("/sessions/{session_id}")
async def get_session(
    session_id: uuid.UUID,
    profile: CurrentProfile,
    registry: Registry,
) -> DataResponse[WizardView]:
    """Read the current step and field values."""
    session = registry.get(session_id, profile.id)
    return DataResponse(data=build_view(session))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def discard_session(
    session_id: uuid.UUID,
    profile: CurrentProfile,
    registry: Registry,
) -> Response:
    """Discard a session and every unsaved edit in it."""
    registry.close(session_id, profile.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =============================================================================
# Edits
# =============================================================================


@router.patch("/sessions/{session_id}/fields")
async def edit_field(
    session_id: uuid.UUID,
    edit: Annotated[FieldEdit, Body()],
    profile: CurrentProfile,
    registry: Registry,
) -> DataResponse[WizardView]:
    """Apply one field edit.

    Raises:
        InvalidFieldEditError: Unknown field, value, or position.
        InvalidStateError: Session still loading or being submitted.
    """
    session = registry.get(session_id, profile.id)
    apply_edit(session, edit)
    return DataResponse(data=build_view(session))


@router.post("/sessions/{session_id}/files/{field}")
async def attach_file(
    session_id: uuid.UUID,
    field: str,
    file: Annotated[UploadFile, File(...)],
    profile: CurrentProfile,
    registry: Registry,
) -> DataResponse[WizardView]:
    """Attach a file to upload when the profile is submitted.

    Images for photos and logos, PDF for resumes. Content is checked by
    magic bytes, never by the client's filename or content type.

    Raises:
        InvalidFieldEditError: If the field does not take files.
        ValidationError: If the file is empty, too large, or the wrong type.
    """
    session = registry.get(session_id, profile.id)
    kind = session.flow.upload_kinds.get(field)
    if kind is None:
        raise ValidationError(
            f"'{field}' does not accept files",
            details=[{"field": field, "error": "INVALID_FIELD_EDIT"}],
        )

    # Security: size limit first, then magic-byte detection
    content = await read_file_with_size_limit(file)
    filename = file.filename or "upload"
    content_type, extension = validate_file_content(
        content, filename, _ALLOWED_CONTENT[kind]
    )

    session.attach_upload(
        field,
        PendingUpload(
            filename=filename,
            content=content,
            content_type=content_type,
            extension=extension,
        ),
    )
    return DataResponse(data=build_view(session))


# =============================================================================
# Navigation
# =============================================================================


@router.post("/sessions/{session_id}/advance")
async def advance(
    session_id: uuid.UUID,
    profile: CurrentProfile,
    db: DbSession,
    store: Store,
    registry: Registry,
) -> DataResponse[NavigationResponse]:
    """Go to the next step if the current one is valid; submit from the last.

    Raises:
        ProfileSaveError: If submission failed (session kept for retry).
    """
    session = registry.get(session_id, profile.id)
    result = await session.advance(FlowContext(db=db, owner_id=profile.id, store=store))
    return _navigation_response(session, result, registry)


@router.post("/sessions/{session_id}/skip")
async def skip(
    session_id: uuid.UUID,
    profile: CurrentProfile,
    db: DbSession,
    store: Store,
    registry: Registry,
) -> DataResponse[NavigationResponse]:
    """Go to the next step without validation (skippable steps only).

    Raises:
        ProfileSaveError: If skipping the last step submitted and it failed.
    """
    session = registry.get(session_id, profile.id)
    result = await session.skip(FlowContext(db=db, owner_id=profile.id, store=store))
    return _navigation_response(session, result, registry)


@router.post("/sessions/{session_id}/retreat")
async def retreat(
    session_id: uuid.UUID,
    profile: CurrentProfile,
    registry: Registry,
) -> DataResponse[NavigationResponse]:
    """Go back one step; blocked at step 1."""
    session = registry.get(session_id, profile.id)
    return _navigation_response(session, session.retreat(), registry)
