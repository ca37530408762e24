"""
Stripe Checkout endpoints.

Endpoints:
- POST /api/stripe/checkout - Create a hosted subscription checkout session
- GET  /api/stripe/verify   - Poll a session and flip the subscription cookie when paid
"""

import structlog
from fastapi import APIRouter, Query, Request, Response

from ghibli_art.api.deps import get_cookie_store, get_stripe_service
from ghibli_art.constants import (
    ERROR_CHECKOUT_FAILED,
    ERROR_MISSING_SESSION_ID,
    ERROR_VERIFY_FAILED,
)
from ghibli_art.errors import ConfigurationError, ProviderError
from ghibli_art.models.billing import CheckoutResponse, VerifyResponse

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/stripe", tags=["billing"])


@router.post("/checkout", response_model=CheckoutResponse)
async def create_checkout_session(request: Request) -> CheckoutResponse:
    """Create a Stripe Checkout session for the subscription price."""
    stripe_service = get_stripe_service(request, ERROR_CHECKOUT_FAILED)

    try:
        session = await stripe_service.create_checkout_session()
    except Exception as e:
        logger.error("stripe_checkout_failed", error=str(e))
        raise ProviderError(ERROR_CHECKOUT_FAILED) from e

    logger.info("stripe_checkout_created", session_id=session.id)
    return CheckoutResponse(url=session.url)


@router.get("/verify", response_model=VerifyResponse)
async def verify_checkout_session(
    request: Request,
    response: Response,
    session_id: str | None = Query(default=None),
) -> VerifyResponse:
    """
    Check whether a Checkout session is paid and complete.

    Paid sessions (re)assert the subscription_active cookie, so calling this
    again with the same session id yields the same cookie state.
    """
    if not session_id:
        raise ConfigurationError(ERROR_MISSING_SESSION_ID, status_code=400)

    stripe_service = get_stripe_service(request, ERROR_VERIFY_FAILED)

    try:
        status = await stripe_service.retrieve_checkout_status(session_id)
    except Exception as e:
        logger.error("stripe_verify_failed", session_id=session_id, error=str(e))
        raise ProviderError(ERROR_VERIFY_FAILED) from e

    logger.info(
        "stripe_session_status",
        session_id=session_id,
        status=status.status,
        payment_status=status.payment_status,
    )

    if not status.is_paid:
        return VerifyResponse(subscription_active=False)

    get_cookie_store(request).activate_subscription(response)
    logger.info("subscription_activated", session_id=session_id)
    return VerifyResponse(subscription_active=True)
