"""Tests for API error classes and their JSON envelope.

Tests verify:
- Each error pins its status and code, with a default message
- NotFoundError phrases the resource and optional id
- api_error_handler renders the {"error": {...}} envelope
- Every response carries the static security headers
"""

import json

import pytest
from httpx import AsyncClient

from nexus.core.errors import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    ProfileSaveError,
    UnauthorizedError,
    ValidationError,
)
from nexus.main import api_error_handler


@pytest.mark.parametrize(
    ("error", "status_code", "code"),
    [
        (ValidationError("Bad edit"), 400, "VALIDATION_ERROR"),
        (UnauthorizedError(), 401, "UNAUTHORIZED"),
        (ForbiddenError(), 403, "FORBIDDEN"),
        (NotFoundError("File"), 404, "NOT_FOUND"),
        (InvalidStateError("Profile is being saved"), 422, "INVALID_STATE_TRANSITION"),
        (ProfileSaveError(), 503, "PROFILE_SAVE_FAILED"),
    ],
)
def test_status_and_code(error, status_code: int, code: str) -> None:
    assert error.status_code == status_code
    assert error.code == code


def test_default_messages() -> None:
    assert UnauthorizedError().message == "Authentication required"
    assert ProfileSaveError().message == "Error saving profile. Please try again later."


def test_not_found_message_includes_id() -> None:
    assert NotFoundError("Wizard session", "abc").message == (
        "Wizard session with id 'abc' not found"
    )
    assert NotFoundError("File").message == "File not found"


def test_handler_renders_envelope() -> None:
    details = [{"field": "file", "error": "FILE_EMPTY"}]
    response = api_error_handler(None, ValidationError("File is empty.", details=details))

    assert response.status_code == 400
    assert json.loads(response.body) == {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "File is empty.",
            "details": details,
        }
    }


@pytest.mark.asyncio
async def test_security_headers_on_every_response(unauthenticated_client: AsyncClient):
    response = await unauthenticated_client.get("/health")

    assert response.headers["x-frame-options"] == "DENY"
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["content-security-policy"].startswith("default-src 'none'")
    assert "cache-control" not in response.headers
