"""
Unit tests for the identity dependency (get_identity).
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from fastapi.security import HTTPAuthorizationCredentials

from ghibli_art.auth import get_identity, identity_from_user
from ghibli_art.models.entitlement import Identity


def _make_request(supabase_client=None, cookies: dict[str, str] | None = None):
    """Create a mock FastAPI Request with app.state.supabase set."""
    request = MagicMock()
    request.app.state.supabase = supabase_client
    request.cookies = cookies or {}
    return request


def _make_credentials(token: str = "valid-token") -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def _supabase_returning(user) -> MagicMock:
    mock_supabase = MagicMock()
    mock_supabase.auth.get_user = AsyncMock(return_value=SimpleNamespace(user=user))
    return mock_supabase


def _user(**metadata) -> SimpleNamespace:
    return SimpleNamespace(id="user-123", email="test@example.com", user_metadata=metadata)


class TestGetIdentity:
    """Tests for the get_identity dependency."""

    async def test_valid_bearer_token_returns_identity(self):
        mock_supabase = _supabase_returning(
            _user(full_name="Chihiro Ogino", avatar_url="https://cdn.test/a.png")
        )
        request = _make_request(supabase_client=mock_supabase)

        result = await get_identity(request, _make_credentials("valid-token"))

        assert isinstance(result, Identity)
        assert result.id == "user-123"
        assert result.email == "test@example.com"
        assert result.name == "Chihiro Ogino"
        assert result.image == "https://cdn.test/a.png"
        mock_supabase.auth.get_user.assert_awaited_once_with("valid-token")

    async def test_access_token_cookie_is_used_without_header(self):
        mock_supabase = _supabase_returning(_user())
        request = _make_request(
            supabase_client=mock_supabase, cookies={"sb-access-token": "cookie-token"}
        )

        result = await get_identity(request, None)

        assert result is not None
        mock_supabase.auth.get_user.assert_awaited_once_with("cookie-token")

    async def test_no_token_is_anonymous(self):
        mock_supabase = _supabase_returning(_user())
        request = _make_request(supabase_client=mock_supabase)

        result = await get_identity(request, None)

        assert result is None
        mock_supabase.auth.get_user.assert_not_awaited()

    async def test_unknown_user_is_anonymous(self):
        request = _make_request(supabase_client=_supabase_returning(None))

        assert await get_identity(request, _make_credentials("bad-token")) is None

    async def test_expired_token_is_anonymous(self):
        mock_supabase = MagicMock()
        mock_supabase.auth.get_user = AsyncMock(side_effect=Exception("Token expired"))
        request = _make_request(supabase_client=mock_supabase)

        assert await get_identity(request, _make_credentials("expired-token")) is None

    async def test_no_supabase_client_is_anonymous(self):
        request = _make_request(supabase_client=None)

        assert await get_identity(request, _make_credentials("any-token")) is None


class TestIdentityFromUser:
    def test_falls_back_to_name_and_picture(self):
        identity = identity_from_user(_user(name="Kiki", picture="https://cdn.test/k.png"))

        assert identity.name == "Kiki"
        assert identity.image == "https://cdn.test/k.png"

    def test_missing_metadata(self):
        identity = identity_from_user(SimpleNamespace(id=42, email=None, user_metadata=None))

        assert identity.id == "42"
        assert identity.name is None
        assert identity.image is None
