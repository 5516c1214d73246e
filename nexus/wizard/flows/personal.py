"""Personal profile flow (candidates, 7 steps).

Photos, work interests, availability and location, transportation,
hobbies, quick facts, personality prompts. Every step can be skipped.
Writes candidate_profiles and, when a location was entered, the account
profile's location.
"""

import logging
from collections.abc import Mapping
from typing import Any

from nexus.core.errors import NotFoundError
from nexus.models.account_profile import ROLE_CANDIDATE
from nexus.repositories.account_profile_repository import AccountProfileRepository
from nexus.repositories.candidate_profile_repository import CandidateProfileRepository
from nexus.services.object_storage import AVATARS_BUCKET, PendingUpload
from nexus.wizard import catalogs, reconcile
from nexus.wizard.compiler import recombine_urls, upload_pending
from nexus.wizard.fields import (
    FieldKind,
    FieldSpec,
    PromptAnswer,
    availability_to_keys,
    completed_prompts,
)
from nexus.wizard.flow import FlowContext, FlowDefinition
from nexus.wizard.sequencer import FieldValues, StepKind, WizardStep

logger = logging.getLogger(__name__)

MAX_PHOTOS = 5
MAX_INTERESTS = 3
MAX_HOBBIES = 10
MAX_QUICK_FACTS = 10
MIN_QUICK_FACTS = 3
PROMPT_SLOTS = 3

FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("photos", FieldKind.PHOTOS, cap=MAX_PHOTOS),
        FieldSpec(
            "interests",
            FieldKind.MULTI_SELECT,
            choices=tuple(catalogs.WORK_INTERESTS),
            cap=MAX_INTERESTS,
        ),
        FieldSpec("availability", FieldKind.AVAILABILITY),
        FieldSpec("location", FieldKind.TEXT, max_length=255),
        FieldSpec(
            "transportation",
            FieldKind.CHOICE,
            choices=tuple(catalogs.TRANSPORT_MODES),
        ),
        FieldSpec(
            "hobbies",
            FieldKind.MULTI_SELECT,
            choices=catalogs.GENERAL_INTERESTS,
            cap=MAX_HOBBIES,
        ),
        FieldSpec(
            "quick_facts",
            FieldKind.MULTI_SELECT,
            choices=tuple(catalogs.QUICK_FACTS),
            cap=MAX_QUICK_FACTS,
        ),
        FieldSpec("prompts", FieldKind.PROMPTS),
    )
}


def _quick_facts_valid(fields: FieldValues) -> bool:
    # None chosen, or at least the minimum.
    count = len(fields.get("quick_facts", []))
    return count == 0 or count >= MIN_QUICK_FACTS


def _prompts_valid(fields: FieldValues) -> bool:
    # Every chosen prompt needs an answer.
    return all(
        slot.answer.strip() for slot in fields.get("prompts", []) if slot.prompt
    )


STEPS: tuple[WizardStep, ...] = (
    WizardStep(
        1, "photos", StepKind.PHOTOS,
        "Add your photos", "Add up to 5 photos that show who you are",
        fields=("photos",),
    ),
    WizardStep(
        2, "interests", StepKind.MULTI_SELECT,
        "What kind of work interests you?", "Select up to 3 areas",
        fields=("interests",),
    ),
    WizardStep(
        3, "availability", StepKind.AVAILABILITY,
        "When are you available?", "Pick the times that suit you and where you are based",
        fields=("availability", "location"),
    ),
    WizardStep(
        4, "transportation", StepKind.SINGLE_SELECT,
        "How do you get around?", "Your main mode of transportation",
        fields=("transportation",),
    ),
    WizardStep(
        5, "hobbies", StepKind.MULTI_SELECT,
        "What are you into?", "Pick up to 10 interests",
        fields=("hobbies",),
    ),
    WizardStep(
        6, "quick_facts", StepKind.MULTI_SELECT,
        "Quick facts about you", "Choose 3 to 10 that fit",
        fields=("quick_facts",),
        is_valid=_quick_facts_valid,
    ),
    WizardStep(
        7, "prompts", StepKind.PROMPTS,
        "Show your personality", "Answer 3 prompts so people get to know you",
        fields=("prompts",),
        is_valid=_prompts_valid,
    ),
)  # fmt: skip


def default_fields() -> dict[str, Any]:
    return {
        "photos": [],
        "interests": [],
        "availability": {},
        "location": "",
        "transportation": "",
        "hobbies": [],
        "quick_facts": [],
        "prompts": [PromptAnswer() for _ in range(PROMPT_SLOTS)],
    }


def merge_record(
    record: Mapping[str, Any] | None, account_location: str | None
) -> dict[str, Any]:
    """Working-state overrides from a stored candidate profile.

    Args:
        record: candidate_profiles row as a dict, or None if absent.
        account_location: Location from the account profile.

    Returns:
        Field values to lay over default_fields().
    """
    overrides: dict[str, Any] = {"location": reconcile.load_text(account_location)}
    if record is None:
        return overrides

    overrides.update(
        photos=reconcile.load_list(record.get("photos")),
        interests=reconcile.load_list(record.get("interests")),
        availability=reconcile.load_availability(record.get("availability")),
        transportation=reconcile.load_text(record.get("transportation")),
        hobbies=reconcile.load_list(record.get("hobbies")),
        quick_facts=reconcile.load_list(record.get("quick_facts")),
    )
    prompts = reconcile.load_prompts(record.get("prompts"), PROMPT_SLOTS)
    if prompts is not None:
        overrides["prompts"] = prompts
    return overrides


def compile_record(fields: Mapping[str, Any], photo_urls: list[str]) -> dict[str, Any]:
    """candidate_profiles column values for the final working state."""
    return {
        "photos": photo_urls,
        "interests": list(fields["interests"]),
        "availability": availability_to_keys(fields["availability"]),
        "transportation": fields["transportation"] or None,
        "hobbies": list(fields["hobbies"]),
        "quick_facts": list(fields["quick_facts"]),
        "prompts": [
            {"prompt": slot.prompt, "answer": slot.answer}
            for slot in completed_prompts(fields["prompts"])
        ],
    }


async def load(ctx: FlowContext) -> dict[str, Any]:
    account = await AccountProfileRepository.get_by_id(ctx.db, ctx.owner_id)
    profile = await CandidateProfileRepository.get_by_user_id(ctx.db, ctx.owner_id)
    return merge_record(
        profile.as_record() if profile else None,
        account.location if account else None,
    )


async def submit(
    ctx: FlowContext,
    fields: Mapping[str, Any],
    pending: Mapping[str, list[PendingUpload]],
) -> None:
    """Upload new photos, upsert the profile, then update the account location.

    The profile upsert is committed before the location write; a failing
    location write still fails the submission.
    """
    uploaded = await upload_pending(
        ctx.store, AVATARS_BUCKET, ctx.owner_id, pending.get("photos", [])
    )
    photo_urls = recombine_urls(fields["photos"], uploaded)[:MAX_PHOTOS]

    await CandidateProfileRepository.upsert(
        ctx.db, ctx.owner_id, **compile_record(fields, photo_urls)
    )
    await ctx.db.commit()

    location = fields["location"].strip()
    if location:
        account = await AccountProfileRepository.update(
            ctx.db, ctx.owner_id, location=location
        )
        if account is None:
            raise NotFoundError("Profile", str(ctx.owner_id))
        await ctx.db.commit()

    logger.info("Saved personal profile for %s", ctx.owner_id)


PERSONAL_FLOW = FlowDefinition(
    name="personal",
    title="Personal Profile",
    owner_role=ROLE_CANDIDATE,
    steps=STEPS,
    fields=FIELDS,
    default_fields=default_fields,
    load=load,
    submit=submit,
    upload_buckets={"photos": AVATARS_BUCKET},
    upload_kinds={"photos": "image"},
    success_message="Personal profile saved!",
    redirect="/dashboard",
)
