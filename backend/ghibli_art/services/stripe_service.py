"""Stripe API wrapper."""

import asyncio
from typing import Any

import stripe

from ghibli_art.config import StripeConfig
from ghibli_art.models.billing import CheckoutSession, CheckoutSessionStatus


class StripeService:
    """Encapsulates Stripe SDK calls used by the checkout routes."""

    def __init__(self, config: StripeConfig) -> None:
        if not config.secret_key:
            raise ValueError("Stripe secret key is required")

        self.config = config
        stripe.api_key = config.secret_key

    async def create_checkout_session(self) -> CheckoutSession:
        """Create a hosted Checkout session for the subscription price."""
        if not self.config.price_id:
            raise ValueError("No Stripe price configured for the subscription")

        params: dict[str, Any] = {
            "mode": "subscription",
            "payment_method_types": self.config.payment_method_types,
            "line_items": [{"price": self.config.price_id, "quantity": 1}],
            "success_url": self.config.checkout_success_url,
            "cancel_url": self.config.checkout_cancel_url,
        }

        session = await asyncio.to_thread(stripe.checkout.Session.create, **params)
        return CheckoutSession(id=session.id, url=session.url)

    async def retrieve_checkout_status(self, session_id: str) -> CheckoutSessionStatus:
        """Read the payment and completion status of a Checkout session."""
        session = await asyncio.to_thread(stripe.checkout.Session.retrieve, session_id)
        return CheckoutSessionStatus(
            session_id=session_id,
            status=getattr(session, "status", None),
            payment_status=getattr(session, "payment_status", None),
        )
