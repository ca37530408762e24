"""Error taxonomy and the JSON handler that renders it."""

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ghibli_art.constants import ERROR_INVALID_REQUEST, ERROR_NO_FILE
from ghibli_art.models.entitlement import AccessReason

logger = structlog.get_logger(__name__)


class GhibliArtError(Exception):
    """Base error rendered as ``{"error": message, ...}``."""

    status_code = 500

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        if status_code:
            self.status_code = status_code

    def to_payload(self) -> dict:
        return {"error": self.message}


class InputValidationError(GhibliArtError):
    """Malformed, oversized or missing request input."""

    status_code = 400


class EntitlementError(GhibliArtError):
    """Trial exhausted or subscription missing."""

    status_code = 402

    def __init__(self, message: str, reason: AccessReason) -> None:
        super().__init__(message)
        self.reason = reason

    def to_payload(self) -> dict:
        return {"error": self.message, "reason": self.reason.value}


class ProviderError(GhibliArtError):
    """An external API (OpenAI, Stripe) failed."""

    status_code = 500

    def __init__(self, message: str, *, details: str | None = None) -> None:
        super().__init__(message)
        self.details = details

    def to_payload(self) -> dict:
        payload = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ConfigurationError(GhibliArtError):
    """A required parameter or provider is missing; status depends on the caller."""


def error_message(exc: BaseException | None) -> str:
    """Best-effort message extraction from provider exceptions."""
    if exc is None:
        return "Unknown error"
    message = getattr(exc, "message", None) or str(exc)
    return str(message) or exc.__class__.__name__


async def ghibli_art_error_handler(_request: Request, exc: GhibliArtError) -> JSONResponse:
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "request_failed",
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Render FastAPI's parameter validation failures as 400 ``{"error": ...}``."""
    locations = [tuple(error.get("loc", ())) for error in exc.errors()]
    if ("body", "file") in locations:
        error = InputValidationError(ERROR_NO_FILE)
    else:
        error = InputValidationError(ERROR_INVALID_REQUEST)
    logger.warning("request_validation_failed", locations=[list(loc) for loc in locations])
    return await ghibli_art_error_handler(request, error)
