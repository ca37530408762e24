"""Accessors for the services created at startup and kept on app.state."""

from fastapi import Request

from ghibli_art.errors import ConfigurationError
from ghibli_art.services.cookie_store import EntitlementCookieStore
from ghibli_art.services.image_generator import ImageGenerationService
from ghibli_art.services.stripe_service import StripeService


def get_cookie_store(request: Request) -> EntitlementCookieStore:
    store = getattr(request.app.state, "cookie_store", None)
    if store is None:
        raise ConfigurationError("Entitlement store not configured", status_code=500)
    return store


def get_image_generator(request: Request, error: str) -> ImageGenerationService:
    generator = getattr(request.app.state, "image_generator", None)
    if generator is None:
        raise ConfigurationError(error, status_code=500)
    return generator


def get_stripe_service(request: Request, error: str) -> StripeService:
    """Stripe is optional at startup; endpoints answer with their own error body."""
    service = getattr(request.app.state, "stripe_service", None)
    if service is None:
        raise ConfigurationError(error, status_code=500)
    return service
