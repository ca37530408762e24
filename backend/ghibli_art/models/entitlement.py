"""Entitlement and identity models."""

from enum import Enum

from pydantic import BaseModel

from ghibli_art.models.base import CamelModel


class AccessReason(str, Enum):
    """Reason for an entitlement decision."""

    TRIAL_AVAILABLE = "trial_available"
    TRIAL_USED = "trial_used"
    SUBSCRIPTION_ACTIVE = "subscription_active"
    SUBSCRIPTION_REQUIRED = "subscription_required"


class Identity(BaseModel):
    """A user resolved by the identity provider."""

    id: str
    email: str | None = None
    name: str | None = None
    image: str | None = None


class EntitlementState(BaseModel):
    """Per-request snapshot rebuilt from cookies and the identity lookup.

    ``trial_used`` only matters while ``logged_in`` is False; an authenticated
    user's access depends on ``subscription_active`` alone.
    """

    model_config = {"frozen": True}

    logged_in: bool = False
    subscription_active: bool = False
    trial_used: bool = False


class EntitlementDecision(BaseModel):
    """Outcome of authorize().

    ``must_mark_trial_used`` is an obligation: the caller sets the trial
    cookie only on a response that carries a successful generation.
    """

    model_config = {"frozen": True}

    allowed: bool
    reason: AccessReason
    must_mark_trial_used: bool = False


class MeResponse(CamelModel):
    """Entitlement snapshot plus identity fields for UI rendering."""

    logged_in: bool
    subscription_active: bool
    trial_used: bool
    email: str | None = None
    name: str | None = None
    image: str | None = None
