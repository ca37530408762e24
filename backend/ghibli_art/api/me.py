"""
Entitlement status and client configuration endpoints.

Endpoints:
- GET /api/me     - Current entitlement snapshot plus identity fields
- GET /api/config - Upload ceiling and style presets for browser pre-checks
"""

from fastapi import APIRouter, Request

from ghibli_art.api.deps import get_cookie_store
from ghibli_art.auth import CurrentIdentity
from ghibli_art.config import get_settings
from ghibli_art.constants import ACCEPTED_MIME_PREFIX
from ghibli_art.models.entitlement import MeResponse
from ghibli_art.models.generation import STYLE_LABELS, ClientConfigResponse, Style, StyleOption

router = APIRouter(tags=["status"])


@router.get("/me", response_model=MeResponse)
async def me(request: Request, identity: CurrentIdentity) -> MeResponse:
    """Report what the UI needs to pick a call-to-action. Never writes cookies."""
    state = get_cookie_store(request).read_state(request, logged_in=identity is not None)
    return MeResponse(
        logged_in=state.logged_in,
        subscription_active=state.subscription_active,
        trial_used=state.trial_used,
        email=identity.email if identity else None,
        name=identity.name if identity else None,
        image=identity.image if identity else None,
    )


@router.get("/config", response_model=ClientConfigResponse)
async def client_config() -> ClientConfigResponse:
    """Publish the server's upload ceiling so the browser checks the same limit."""
    return ClientConfigResponse(
        max_upload_bytes=get_settings().generation.max_upload_bytes,
        accepted_mime_prefix=ACCEPTED_MIME_PREFIX,
        default_style=Style.default(),
        styles=[StyleOption(id=style, label=STYLE_LABELS[style]) for style in Style],
    )
