"""
Shared test fixtures for the Ghibli Art backend test suite.
"""

from collections.abc import Iterator
from types import SimpleNamespace

import pytest
import structlog
from fastapi.testclient import TestClient

from ghibli_art.config import CookieConfig
from ghibli_art.models.entitlement import Identity
from ghibli_art.models.generation import ImageResult, ImageUpload, UrlImage
from ghibli_art.services.cookie_store import EntitlementCookieStore

TEST_SESSION_SECRET = "test-session-secret"


@pytest.fixture(autouse=True)
def _set_test_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Set required environment variables for tests so Settings can be instantiated."""
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test-fake-key-for-testing")
    monkeypatch.setenv("SESSION_SECRET", TEST_SESSION_SECRET)
    monkeypatch.setenv("ENVIRONMENT", "development")
    # Keep optional providers unconfigured unless a test opts in
    monkeypatch.delenv("STRIPE__SECRET_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_URL", raising=False)
    # Disable LangSmith tracing in tests
    monkeypatch.setenv("LANGCHAIN_TRACING_V2", "false")


@pytest.fixture(autouse=True)
def _configure_structlog_for_tests():
    """Configure structlog for tests using a simple, deterministic setup."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(0),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture
def client() -> Iterator[TestClient]:
    """FastAPI TestClient with the lifespan run, so app.state is populated."""
    # Clear the lru_cache so settings pick up test env vars
    from ghibli_art.config import get_settings

    get_settings.cache_clear()

    from ghibli_art.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def cookie_store() -> EntitlementCookieStore:
    return EntitlementCookieStore(TEST_SESSION_SECRET, CookieConfig())


@pytest.fixture
def sample_upload() -> ImageUpload:
    return ImageUpload(
        filename="portrait.jpg",
        content_type="image/jpeg",
        content=b"\xff\xd8\xff\xe0" + b"\x00" * 2048,
    )


@pytest.fixture
def sample_identity() -> Identity:
    return Identity(
        id="user-1",
        email="totoro@example.com",
        name="Totoro",
        image="https://cdn.example.com/avatar.png",
    )


class FakeImageGenerator:
    """Records calls; returns a fixed result or raises the given error."""

    def __init__(self, result: ImageResult | None = None, error: Exception | None = None):
        self.result = result or UrlImage(url="https://images.test/generated.png")
        self.error = error
        self.calls: list[SimpleNamespace] = []

    async def generate(self, upload: ImageUpload, prompt: str) -> ImageResult:
        self.calls.append(SimpleNamespace(upload=upload, prompt=prompt))
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self) -> None:
        return None


@pytest.fixture
def fake_generator() -> FakeImageGenerator:
    return FakeImageGenerator()
