"""
Entitlement decision logic.

Pure functions over EntitlementState. Cookie reads and writes live in
cookie_store.py; nothing here performs I/O.

Decision table:

    logged_in  subscription_active  trial_used  ->  decision
    ---------  -------------------  ----------      ----------------------------------
    False      any                  False           allow, must_mark_trial_used=True
    False      any                  True            deny  trial_used
    True       False                any             deny  subscription_required
    True       True                 any             allow, must_mark_trial_used=False
"""

from ghibli_art.constants import ERROR_SUBSCRIPTION_REQUIRED, ERROR_TRIAL_USED
from ghibli_art.models.entitlement import AccessReason, EntitlementDecision, EntitlementState

DENIAL_MESSAGES: dict[AccessReason, str] = {
    AccessReason.TRIAL_USED: ERROR_TRIAL_USED,
    AccessReason.SUBSCRIPTION_REQUIRED: ERROR_SUBSCRIPTION_REQUIRED,
}


def authorize(state: EntitlementState) -> EntitlementDecision:
    """Decide whether a generation request may proceed."""
    if not state.logged_in:
        if state.trial_used:
            return EntitlementDecision(allowed=False, reason=AccessReason.TRIAL_USED)
        return EntitlementDecision(
            allowed=True,
            reason=AccessReason.TRIAL_AVAILABLE,
            must_mark_trial_used=True,
        )

    if not state.subscription_active:
        return EntitlementDecision(allowed=False, reason=AccessReason.SUBSCRIPTION_REQUIRED)
    return EntitlementDecision(allowed=True, reason=AccessReason.SUBSCRIPTION_ACTIVE)


def denial_message(reason: AccessReason) -> str:
    return DENIAL_MESSAGES.get(reason, ERROR_SUBSCRIPTION_REQUIRED)
