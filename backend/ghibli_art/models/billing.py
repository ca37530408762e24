"""Checkout and subscription verification models."""

from pydantic import BaseModel

from ghibli_art.models.base import CamelModel


class CheckoutSession(BaseModel):
    """A freshly created hosted checkout session."""

    id: str
    url: str


class CheckoutSessionStatus(BaseModel):
    """Normalized completion state of a Stripe Checkout session."""

    session_id: str
    status: str | None = None
    payment_status: str | None = None

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid" and self.status == "complete"


class CheckoutResponse(CamelModel):
    url: str


class VerifyResponse(CamelModel):
    subscription_active: bool
