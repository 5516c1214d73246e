"""Company setup flow (recruiters, 5 steps).

Name, location, industry & size, about, logo. Steps 1-4 are gated and
cannot be skipped; only the logo step can. A stored location satisfies the
location step until new parts replace it. Writes companies.
"""

import logging
from collections.abc import Mapping
from typing import Any

from nexus.models.account_profile import ROLE_RECRUITER
from nexus.repositories.company_repository import CompanyRepository
from nexus.services.object_storage import (
    COMPANY_LOGOS_BUCKET,
    PendingUpload,
    is_remote_url,
)
from nexus.wizard import catalogs, reconcile
from nexus.wizard.codecs import compose_location
from nexus.wizard.compiler import upload_pending
from nexus.wizard.fields import FieldKind, FieldSpec
from nexus.wizard.flow import FlowContext, FlowDefinition
from nexus.wizard.sequencer import FieldValues, StepKind, WizardStep

logger = logging.getLogger(__name__)

LOCATION_PARTS = ("address", "city", "state", "country", "postal_code")

FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("name", FieldKind.TEXT, max_length=255),
        FieldSpec("address", FieldKind.TEXT, max_length=255),
        FieldSpec("city", FieldKind.TEXT, max_length=100),
        FieldSpec("state", FieldKind.TEXT, max_length=100),
        FieldSpec("country", FieldKind.TEXT, max_length=100),
        FieldSpec("postal_code", FieldKind.TEXT, max_length=20),
        FieldSpec("industry", FieldKind.CHOICE, choices=catalogs.INDUSTRIES),
        FieldSpec("size", FieldKind.CHOICE, choices=catalogs.COMPANY_SIZES),
        FieldSpec("founded_year", FieldKind.TEXT, max_length=4, digits_only=True),
        FieldSpec("description", FieldKind.TEXT, max_length=5000),
        FieldSpec("website", FieldKind.TEXT, max_length=2048),
        FieldSpec("logo_url", FieldKind.FILE),
    )
}


def _filled(fields: FieldValues, name: str) -> bool:
    return bool(str(fields.get(name) or "").strip())


STEPS: tuple[WizardStep, ...] = (
    WizardStep(
        1, "name", StepKind.TEXT,
        "Company Name", "What's your company called?",
        fields=("name",),
        is_valid=lambda f: _filled(f, "name"),
        skippable=False,
    ),
    WizardStep(
        2, "location", StepKind.LOCATION,
        "Company Location", "Where is your company based?",
        fields=LOCATION_PARTS,
        is_valid=lambda f: (
            _filled(f, "city") or _filled(f, "country") or _filled(f, "location")
        ),
        skippable=False,
    ),
    WizardStep(
        3, "industry", StepKind.SINGLE_SELECT,
        "Industry & Size", "Tell us about your company",
        fields=("industry", "size", "founded_year"),
        is_valid=lambda f: _filled(f, "industry") and _filled(f, "size"),
        skippable=False,
    ),
    WizardStep(
        4, "about", StepKind.TEXT,
        "About Your Company", "Share your company's story",
        fields=("description", "website"),
        is_valid=lambda f: _filled(f, "description"),
        skippable=False,
    ),
    WizardStep(
        5, "logo", StepKind.UPLOAD,
        "Company Logo", "Upload your company logo (optional)",
        fields=("logo_url",),
    ),
)  # fmt: skip


def default_fields() -> dict[str, Any]:
    defaults = {name: "" for name in FIELDS}
    # Stored composed location; not editable, kept when no parts are entered.
    defaults["location"] = ""
    return defaults


def merge_record(record: Mapping[str, Any] | None) -> dict[str, Any]:
    """Working-state overrides from a stored company row.

    The composed location cannot be split back into its parts, so it is
    carried as-is and the part fields start empty.
    """
    if record is None:
        return {}

    founded_year = record.get("founded_year")
    return {
        "name": reconcile.load_text(record.get("name")),
        "industry": reconcile.load_text(record.get("industry")),
        "size": reconcile.load_text(record.get("size")),
        "description": reconcile.load_text(record.get("description")),
        "website": reconcile.load_text(record.get("website")),
        "founded_year": str(founded_year) if founded_year is not None else "",
        "logo_url": reconcile.load_text(record.get("logo_url")),
        "location": reconcile.load_text(record.get("location")),
    }


def compile_record(fields: Mapping[str, Any], logo_url: str | None) -> dict[str, Any]:
    """companies column values for the final working state."""
    location = compose_location(*(fields[part] for part in LOCATION_PARTS))
    founded_year = fields["founded_year"].strip()
    return {
        "name": fields["name"].strip(),
        "logo_url": logo_url,
        "industry": fields["industry"] or None,
        "size": fields["size"] or None,
        "website": fields["website"].strip() or None,
        "description": fields["description"].strip() or None,
        "location": location or fields["location"] or None,
        "founded_year": int(founded_year) if founded_year else None,
    }


async def load(ctx: FlowContext) -> dict[str, Any]:
    company = await CompanyRepository.get_by_recruiter_id(ctx.db, ctx.owner_id)
    return merge_record(company.as_record() if company else None)


async def submit(
    ctx: FlowContext,
    fields: Mapping[str, Any],
    pending: Mapping[str, list[PendingUpload]],
) -> None:
    """Upload a new logo if one is attached, then upsert the company."""
    uploaded = await upload_pending(
        ctx.store, COMPANY_LOGOS_BUCKET, ctx.owner_id, pending.get("logo_url", [])
    )
    existing = fields["logo_url"] if is_remote_url(fields["logo_url"]) else None
    logo_url = uploaded[-1] if uploaded else existing

    await CompanyRepository.upsert(
        ctx.db, ctx.owner_id, **compile_record(fields, logo_url)
    )
    await ctx.db.commit()
    logger.info("Saved company profile for recruiter %s", ctx.owner_id)


COMPANY_FLOW = FlowDefinition(
    name="company",
    title="Company Profile",
    owner_role=ROLE_RECRUITER,
    steps=STEPS,
    fields=FIELDS,
    default_fields=default_fields,
    load=load,
    submit=submit,
    upload_buckets={"logo_url": COMPANY_LOGOS_BUCKET},
    upload_kinds={"logo_url": "image"},
    success_message="Company profile created!",
    redirect="/recruiter-dashboard",
)
