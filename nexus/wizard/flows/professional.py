"""Professional profile flow (candidates, 5 steps).

Experience, education, soft skills, technical skills, and documents &
links. Every step can be skipped. Writes candidate_profiles.
"""

import logging
from collections.abc import Mapping
from typing import Any

from nexus.models.account_profile import ROLE_CANDIDATE
from nexus.repositories.candidate_profile_repository import CandidateProfileRepository
from nexus.services.object_storage import RESUMES_BUCKET, PendingUpload, is_remote_url
from nexus.wizard import catalogs, reconcile
from nexus.wizard.codecs import (
    EducationEntry,
    decode_achievements,
    decode_education,
    encode_achievements,
    encode_education,
)
from nexus.wizard.compiler import experience_years, upload_pending
from nexus.wizard.fields import ExperienceEntry, FieldKind, FieldSpec
from nexus.wizard.flow import FlowContext, FlowDefinition
from nexus.wizard.sequencer import FieldValues, StepKind, WizardStep

logger = logging.getLogger(__name__)

FIELDS: dict[str, FieldSpec] = {
    spec.name: spec
    for spec in (
        FieldSpec("experience", FieldKind.ENTRIES, entry_type=ExperienceEntry),
        FieldSpec("education", FieldKind.ENTRIES, entry_type=EducationEntry),
        FieldSpec(
            "skills",
            FieldKind.SKILLS,
            choices=catalogs.SOFT_SKILLS + catalogs.TECHNICAL_SKILLS,
        ),
        FieldSpec("resume_url", FieldKind.FILE),
        FieldSpec("portfolio_url", FieldKind.TEXT, max_length=2048),
        FieldSpec("linkedin_url", FieldKind.TEXT, max_length=2048),
        FieldSpec("achievements", FieldKind.TEXT_LIST),
    )
}


def _experience_valid(fields: FieldValues) -> bool:
    return all(
        entry.title.strip() and entry.company.strip()
        for entry in fields.get("experience", [])
    )


def _education_valid(fields: FieldValues) -> bool:
    return all(
        entry.degree.strip() and entry.school.strip()
        for entry in fields.get("education", [])
    )


STEPS: tuple[WizardStep, ...] = (
    WizardStep(
        1, "experience", StepKind.ENTRIES,
        "Work Experience", "Tell us about your previous roles",
        fields=("experience",),
        is_valid=_experience_valid,
    ),
    WizardStep(
        2, "education", StepKind.ENTRIES,
        "Education", "Add your educational background",
        fields=("education",),
        is_valid=_education_valid,
    ),
    WizardStep(
        3, "soft_skills", StepKind.SKILLS,
        "Soft Skills", "Select the interpersonal skills you bring",
        fields=("skills",),
    ),
    WizardStep(
        4, "technical_skills", StepKind.SKILLS,
        "Technical Skills", "Select or add the practical skills you have",
        fields=("skills",),
    ),
    WizardStep(
        5, "documents", StepKind.DOCUMENTS,
        "Documents & Links", "Upload your resume and share your links",
        fields=("resume_url", "portfolio_url", "linkedin_url", "achievements"),
    ),
)  # fmt: skip


def default_fields() -> dict[str, Any]:
    return {
        "experience": [],
        "education": [],
        "skills": [],
        "resume_url": "",
        "portfolio_url": "",
        "linkedin_url": "",
        "achievements": [],
    }


def merge_record(record: Mapping[str, Any] | None) -> dict[str, Any]:
    """Working-state overrides from a stored candidate profile."""
    if record is None:
        return {}

    overrides: dict[str, Any] = {
        "education": decode_education(record.get("education")),
        "skills": reconcile.load_list(record.get("skills")),
        "resume_url": reconcile.load_text(record.get("resume_url")),
        "portfolio_url": reconcile.load_text(record.get("portfolio_url")),
        "linkedin_url": reconcile.load_text(record.get("linkedin_url")),
        "achievements": decode_achievements(record.get("achievements")),
    }
    experience = reconcile.load_records(record.get("experience"), ExperienceEntry)
    if experience is not None:
        overrides["experience"] = experience
    return overrides


def compile_record(fields: Mapping[str, Any], resume_url: str | None) -> dict[str, Any]:
    """candidate_profiles column values for the final working state."""
    experience = fields["experience"]
    return {
        "experience": [
            {
                "title": entry.title,
                "company": entry.company,
                "duration": entry.duration,
                "description": entry.description,
            }
            for entry in experience
        ],
        "experience_years": experience_years(experience),
        "education": encode_education(fields["education"]),
        "skills": list(fields["skills"]),
        "resume_url": resume_url,
        "portfolio_url": fields["portfolio_url"].strip() or None,
        "linkedin_url": fields["linkedin_url"].strip() or None,
        "achievements": encode_achievements(fields["achievements"]),
    }


async def load(ctx: FlowContext) -> dict[str, Any]:
    profile = await CandidateProfileRepository.get_by_user_id(ctx.db, ctx.owner_id)
    return merge_record(profile.as_record() if profile else None)


async def submit(
    ctx: FlowContext,
    fields: Mapping[str, Any],
    pending: Mapping[str, list[PendingUpload]],
) -> None:
    """Upload a new resume if one is attached, then upsert the profile.

    Without a new resume (or when its upload fails) the stored resume URL
    is kept.
    """
    uploaded = await upload_pending(
        ctx.store, RESUMES_BUCKET, ctx.owner_id, pending.get("resume_url", [])
    )
    existing = fields["resume_url"] if is_remote_url(fields["resume_url"]) else None
    resume_url = uploaded[-1] if uploaded else existing

    await CandidateProfileRepository.upsert(
        ctx.db, ctx.owner_id, **compile_record(fields, resume_url)
    )
    await ctx.db.commit()
    logger.info("Saved professional profile for %s", ctx.owner_id)


PROFESSIONAL_FLOW = FlowDefinition(
    name="professional",
    title="Professional Profile",
    owner_role=ROLE_CANDIDATE,
    steps=STEPS,
    fields=FIELDS,
    default_fields=default_fields,
    load=load,
    submit=submit,
    upload_buckets={"resume_url": RESUMES_BUCKET},
    upload_kinds={"resume_url": "pdf"},
    success_message="Professional profile saved!",
    redirect="/dashboard",
)
