"""Flow definition: the per-flow strategy plugged into the generic engine.

A FlowDefinition bundles what differs between the personal, professional
and company wizards: the step list, the editable fields, default working
state, how a stored record is merged into it, and how the final working
state is written back.
"""

import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from nexus.services.object_storage import ObjectStore, PendingUpload
from nexus.wizard.fields import FieldSpec
from nexus.wizard.sequencer import WizardStep


@dataclass(frozen=True)
class FlowContext:
    """Collaborators available to a flow's load and submit hooks."""

    db: AsyncSession
    owner_id: uuid.UUID
    store: ObjectStore


LoadHook = Callable[[FlowContext], Awaitable[dict[str, Any]]]
SubmitHook = Callable[
    [FlowContext, Mapping[str, Any], Mapping[str, list[PendingUpload]]],
    Awaitable[None],
]


@dataclass(frozen=True)
class FlowDefinition:
    """Static description of one profile flow.

    Attributes:
        name: URL identifier ("personal", "professional", "company").
        title: Human-readable flow name.
        owner_role: Account role allowed to run the flow.
        steps: Ordered step definitions.
        fields: Editable fields by name.
        default_fields: Factory for fresh working state.
        load: Fetches the stored record and returns working-state overrides.
        submit: Uploads pending files and writes the record.
        upload_buckets: Object-store bucket per upload field.
        upload_kinds: Accepted content per upload field ("image" or "pdf").
        success_message: Shown after a successful submission.
        redirect: Where the client goes after a successful submission.
    """

    name: str
    title: str
    owner_role: str
    steps: tuple[WizardStep, ...]
    fields: Mapping[str, FieldSpec]
    default_fields: Callable[[], dict[str, Any]]
    load: LoadHook
    submit: SubmitHook
    upload_buckets: Mapping[str, str] = field(default_factory=dict)
    upload_kinds: Mapping[str, str] = field(default_factory=dict)
    success_message: str = "Profile saved!"
    redirect: str = "/dashboard"
