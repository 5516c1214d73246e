"""FastAPI application entry point.

create_app() wires logging, the security header and CORS middleware, the
error envelope handlers, the v1 routers and /health.
"""

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from nexus.api.v1.router import router as v1_router
from nexus.core.config import settings
from nexus.core.errors import APIError
from nexus.core.logging import configure_logging
from nexus.core.responses import ErrorDetail, ErrorResponse

logger = structlog.get_logger()

# Set on every response; the API never serves HTML.
_STATIC_SECURITY_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
}

# Endpoints may override these (stored files are immutable and embeddable).
_DEFAULT_API_CACHE_CONTROL = "no-store, max-age=0"
_DEFAULT_RESOURCE_POLICY = "same-origin"

_HSTS = "max-age=31536000; includeSubDomains"


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Apply the security header set to every response.

    Cache-Control and Cross-Origin-Resource-Policy are defaults only, so the
    file download endpoint can publish cacheable, cross-origin images. HSTS is
    sent in production, where TLS terminates at the reverse proxy.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        headers = response.headers

        headers.update(_STATIC_SECURITY_HEADERS)
        if request.url.path.startswith("/api/"):
            headers.setdefault("Cache-Control", _DEFAULT_API_CACHE_CONTROL)
        headers.setdefault("Cross-Origin-Resource-Policy", _DEFAULT_RESOURCE_POLICY)
        if settings.environment == "production":
            headers["Strict-Transport-Security"] = _HSTS

        return response


def _error_response(
    status_code: int,
    code: str,
    message: str,
    details: list[dict] | None = None,
) -> JSONResponse:
    """Render the {"error": {...}} envelope."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


def api_error_handler(_request: Request, exc: APIError) -> JSONResponse:
    return _error_response(exc.status_code, exc.code, exc.message, exc.details)


def validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as VALIDATION_ERROR with per-field details.

    Pydantic's input echo is left out; an edit may carry free text.
    """
    details = [
        {"loc": list(error["loc"]), "msg": error["msg"], "type": error["type"]}
        for error in exc.errors()
    ]
    return _error_response(400, "VALIDATION_ERROR", "Request validation failed", details)


def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log the failure and answer with a generic 500; internals never reach clients."""
    logger.exception("Unhandled exception", exc_info=exc, path=request.url.path)
    return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred")


def create_app() -> FastAPI:
    """Build the application. Tests call this directly to get a fresh app."""
    configure_logging()

    app = FastAPI(
        title="Nexus Profiles API",
        version="1.0.0",
        description="Multi-step profile setup for candidates and recruiters",
    )

    # Starlette runs the last-added middleware first; CORS must see preflights.
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, internal_error_handler)

    app.include_router(v1_router, prefix="/api/v1")

    @app.get("/health")
    def health_check() -> dict:
        return {"status": "healthy"}

    return app


# uvicorn nexus.main:app
app = create_app()
