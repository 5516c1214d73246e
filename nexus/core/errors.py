"""Errors raised by the profile flows and mapped to the JSON error envelope.

Each subclass pins its HTTP status and machine-readable code as class
attributes; main.api_error_handler renders any APIError from those.
"""


class APIError(Exception):
    """Base class for errors surfaced to API clients.

    Attributes:
        code: Machine-readable error code (e.g., "NOT_FOUND").
        status_code: HTTP status code to return.
        message: Human-readable error message.
        details: Optional per-field error entries.
    """

    code = "INTERNAL_ERROR"
    status_code = 500
    default_message = "An unexpected error occurred"

    def __init__(
        self,
        message: str | None = None,
        details: list[dict] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)


class ValidationError(APIError):
    """Rejected request input (400): bad edits, rejected uploads."""

    code = "VALIDATION_ERROR"
    status_code = 400
    default_message = "Request validation failed"


class UnauthorizedError(APIError):
    """No usable session (401). The message never says why."""

    code = "UNAUTHORIZED"
    status_code = 401
    default_message = "Authentication required"


class ForbiddenError(APIError):
    """Authenticated, but the account's role does not own the flow (403)."""

    code = "FORBIDDEN"
    status_code = 403
    default_message = "Access denied"


class NotFoundError(APIError):
    """Resource not found (404).

    Also used for resources owned by someone else, so a wizard session id
    from another account looks exactly like an unknown one.
    """

    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, resource: str, resource_id: str | None = None) -> None:
        suffix = f" with id '{resource_id}'" if resource_id else ""
        super().__init__(f"{resource}{suffix} not found")


class InvalidStateError(APIError):
    """The session cannot take this action right now (422).

    E.g. editing while the stored profile is still loading or while a
    submission is in flight.
    """

    code = "INVALID_STATE_TRANSITION"
    status_code = 422


class ProfileSaveError(APIError):
    """Profile submission failed (503).

    Surfaced once per failed submission, whichever write failed. The
    wizard session survives so the user can retry without re-entering data.
    """

    code = "PROFILE_SAVE_FAILED"
    status_code = 503
    default_message = "Error saving profile. Please try again later."
