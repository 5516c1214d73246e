"""Pydantic request/response schemas for API endpoints."""

from nexus.schemas.profile_flow import (
    AddEntryEdit,
    AddSkillEdit,
    AnswerPromptEdit,
    ChoosePromptEdit,
    CompletionView,
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

__all__ = [
    # Field edits
    "AddEntryEdit",
    "AddSkillEdit",
    "AnswerPromptEdit",
    "ChoosePromptEdit",
    "FieldEdit",
    "RemoveEntryEdit",
    "RemovePhotoEdit",
    "RemoveSkillEdit",
    "SetFieldEdit",
    "ToggleAvailabilityEdit",
    "ToggleEdit",
    "UpdateEntryEdit",
    # Views
    "CompletionView",
    "NavigationResponse",
    "StepView",
    "WizardView",
]
