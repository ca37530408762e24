"""
Identity resolution for FastAPI endpoints.

Identity is delegated to Supabase Auth. A request is logged in when it
carries an access token (Bearer header, or the access-token cookie set by the
browser session) that ``supabase.auth.get_user()`` accepts. Every other case
resolves to anonymous; identity lookup never fails a request.
"""

from typing import Annotated, Any

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ghibli_art.config import get_settings
from ghibli_art.models.entitlement import Identity

logger = structlog.get_logger(__name__)

_bearer_scheme = HTTPBearer(auto_error=False)


def _access_token(request: Request, credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials and credentials.credentials:
        return credentials.credentials
    cookie_name = get_settings().cookies.access_token_cookie_name
    return request.cookies.get(cookie_name) or None


def identity_from_user(user: Any) -> Identity:
    """Map a Supabase user onto the identity fields the UI renders."""
    metadata = getattr(user, "user_metadata", None) or {}
    return Identity(
        id=str(user.id),
        email=getattr(user, "email", None),
        name=metadata.get("full_name") or metadata.get("name"),
        image=metadata.get("avatar_url") or metadata.get("picture"),
    )


async def get_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer_scheme),
) -> Identity | None:
    """
    FastAPI dependency returning the caller's identity, or None when anonymous.

    Anonymous when: no token, Supabase not configured, or the token is
    rejected/expired.
    """
    token = _access_token(request, credentials)
    if not token:
        return None

    supabase = getattr(request.app.state, "supabase", None)
    if supabase is None:
        logger.warning("identity_provider_unavailable")
        return None

    try:
        response = await supabase.auth.get_user(token)
    except Exception as e:
        logger.warning("auth_token_verification_failed", error=str(e))
        return None

    user = response.user if response else None
    if user is None:
        return None
    return identity_from_user(user)


CurrentIdentity = Annotated[Identity | None, Depends(get_identity)]
