"""
Cookie-backed entitlement store.

Each flag is its own cookie whose value is an itsdangerous-signed ``true``.
A flag reads as set only when the cookie is present, the signature verifies
and the signature is younger than the cookie's max-age; anything else
(absent, tampered, expired, forged by hand as plain ``true``) reads as False.
"""

import structlog
from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from starlette.requests import Request
from starlette.responses import Response

from ghibli_art.config import CookieConfig
from ghibli_art.constants import ENTITLEMENT_COOKIE_SALT
from ghibli_art.models.entitlement import EntitlementState

logger = structlog.get_logger(__name__)


class EntitlementCookieStore:
    """Reads and writes the trial_used / subscription_active flags."""

    def __init__(self, secret: str, config: CookieConfig | None = None, *, secure: bool = False) -> None:
        if not secret:
            raise ValueError("A session secret is required to sign entitlement cookies")
        self.config = config or CookieConfig()
        self.secure = secure
        self.serializer = URLSafeTimedSerializer(secret, salt=ENTITLEMENT_COOKIE_SALT)

    def encode_flag(self, name: str) -> str:
        """Signed cookie value asserting ``name`` is set."""
        return self.serializer.dumps({"flag": name, "value": True})

    def _read_flag(self, request: Request, name: str, max_age: int) -> bool:
        raw = request.cookies.get(name)
        if not raw:
            return False
        try:
            data = self.serializer.loads(raw, max_age=max_age)
        except SignatureExpired:
            logger.info("entitlement_cookie_expired", cookie=name)
            return False
        except BadSignature:
            logger.warning("entitlement_cookie_invalid", cookie=name)
            return False
        # A value signed for one cookie must not unlock the other
        return isinstance(data, dict) and data.get("flag") == name and data.get("value") is True

    def _write_flag(self, response: Response, name: str, max_age: int) -> None:
        response.set_cookie(
            key=name,
            value=self.encode_flag(name),
            max_age=max_age,
            path=self.config.path,
            secure=self.secure,
            httponly=True,
            samesite=self.config.same_site,
        )

    def trial_used(self, request: Request) -> bool:
        return self._read_flag(
            request, self.config.trial_cookie_name, self.config.trial_max_age_seconds
        )

    def subscription_active(self, request: Request) -> bool:
        return self._read_flag(
            request,
            self.config.subscription_cookie_name,
            self.config.subscription_max_age_seconds,
        )

    def read_state(self, request: Request, *, logged_in: bool) -> EntitlementState:
        """Rebuild the entitlement snapshot for this request."""
        return EntitlementState(
            logged_in=logged_in,
            subscription_active=self.subscription_active(request),
            trial_used=self.trial_used(request),
        )

    def mark_trial_used(self, response: Response) -> None:
        self._write_flag(
            response, self.config.trial_cookie_name, self.config.trial_max_age_seconds
        )

    def activate_subscription(self, response: Response) -> None:
        self._write_flag(
            response,
            self.config.subscription_cookie_name,
            self.config.subscription_max_age_seconds,
        )
