"""
Image generation API endpoint.

Endpoints:
- POST /api/generate - Stylize an uploaded photo (multipart: file, style, prompt?)

Request handling order:
1. Upload validation (400): file present, image/* MIME type, size ceiling,
   prompt override length.
2. Entitlement (402): authorize() against the cookie/identity snapshot.
   Denied requests never reach OpenAI.
3. Generation (500 on provider failure, after one fallback retry).
4. Success (200): the trial cookie is attached only here, and only when the
   decision carries must_mark_trial_used.
"""

import structlog
from fastapi import APIRouter, File, Form, Request, Response, UploadFile

from ghibli_art.api.deps import get_cookie_store, get_image_generator
from ghibli_art.auth import CurrentIdentity
from ghibli_art.config import GenerationConfig, get_settings
from ghibli_art.constants import (
    ACCEPTED_MIME_PREFIX,
    ERROR_FILE_TOO_LARGE,
    ERROR_GENERATION_FAILED,
    ERROR_INVALID_FILE_TYPE,
    ERROR_NO_FILE,
    ERROR_PROMPT_TOO_LONG,
)
from ghibli_art.errors import EntitlementError, InputValidationError
from ghibli_art.models.generation import GenerationResponse, ImageUpload, Style
from ghibli_art.prompts.styles import resolve_prompt
from ghibli_art.services.entitlements import authorize, denial_message

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["generation"])


async def read_upload(file: UploadFile | None, config: GenerationConfig) -> ImageUpload:
    """Validate the uploaded photo and load its bytes."""
    if file is None or not file.filename:
        raise InputValidationError(ERROR_NO_FILE)

    content_type = file.content_type or ""
    if not content_type.startswith(ACCEPTED_MIME_PREFIX):
        raise InputValidationError(ERROR_INVALID_FILE_TYPE)

    # Reject from the multipart header before reading when the size is known
    if file.size is not None and file.size > config.max_upload_bytes:
        raise InputValidationError(ERROR_FILE_TOO_LARGE)

    content = await file.read()
    if not content:
        raise InputValidationError(ERROR_NO_FILE)
    if len(content) > config.max_upload_bytes:
        raise InputValidationError(ERROR_FILE_TOO_LARGE)

    return ImageUpload(filename=file.filename, content_type=content_type, content=content)


@router.post("/generate", response_model=GenerationResponse)
async def generate_image(
    request: Request,
    response: Response,
    identity: CurrentIdentity,
    file: UploadFile | None = File(default=None),
    style: str | None = Form(default=None),
    prompt: str | None = Form(default=None),
) -> GenerationResponse:
    """
    Stylize an uploaded photo.

    Anonymous callers get one free generation (tracked by the trial_used
    cookie); logged-in callers need an active subscription.

    Example usage with curl:
    ```
    curl -X POST http://localhost:8000/api/generate \
      -F "file=@portrait.jpg;type=image/jpeg" \
      -F "style=ghibli-filmic"
    ```
    """
    config = get_settings().generation

    upload = await read_upload(file, config)
    if prompt and len(prompt) > config.max_prompt_override_chars:
        raise InputValidationError(ERROR_PROMPT_TOO_LONG)

    cookie_store = get_cookie_store(request)
    state = cookie_store.read_state(request, logged_in=identity is not None)
    decision = authorize(state)
    if not decision.allowed:
        logger.info("entitlement_denied", reason=decision.reason.value, logged_in=state.logged_in)
        raise EntitlementError(denial_message(decision.reason), decision.reason)

    resolved_style = Style.from_identifier(style)
    generator = get_image_generator(request, ERROR_GENERATION_FAILED)
    structlog.contextvars.bind_contextvars(style=resolved_style.value)

    result = await generator.generate(upload, resolve_prompt(resolved_style, prompt))

    if decision.must_mark_trial_used:
        cookie_store.mark_trial_used(response)
        logger.info("trial_consumed")

    return GenerationResponse(image_url=result.display_url, style=resolved_style)
