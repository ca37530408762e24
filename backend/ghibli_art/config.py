"""
Application configuration using pydantic-settings.
Loads environment variables from .env file.

Nested config groups (GenerationConfig, CookieConfig, StripeConfig) are
env-overridable via the double-underscore delimiter, e.g.:
    GENERATION__MAX_UPLOAD_BYTES=10485760
    COOKIES__SUBSCRIPTION_MAX_AGE_SECONDS=86400
    STRIPE__PRICE_ID=price_123
"""

from functools import lru_cache

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ghibli_art.constants import (
    DEFAULT_MAX_UPLOAD_BYTES,
    ONE_YEAR_SECONDS,
    THIRTY_DAYS_SECONDS,
)


class GenerationConfig(BaseModel):
    """OpenAI image generation parameters and upload limits."""

    model: str = "gpt-image-1"
    size: str = "1024x1024"
    # Single ceiling shared by /api/generate and the browser pre-check (/api/config)
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    max_prompt_override_chars: int = 1000
    # images.edit with gpt-image-1 routinely takes 30-90s per image
    timeout_seconds: float = 120.0
    # SDK-level retries stay off: ImageGenerationService owns the attempt policy
    max_retries: int = 0


class CookieConfig(BaseModel):
    """Entitlement cookie names and lifetimes."""

    trial_cookie_name: str = "trial_used"
    subscription_cookie_name: str = "subscription_active"
    trial_max_age_seconds: int = ONE_YEAR_SECONDS
    subscription_max_age_seconds: int = THIRTY_DAYS_SECONDS
    same_site: str = "lax"
    path: str = "/"
    # Cookie carrying the identity provider's access token (browser sessions)
    access_token_cookie_name: str = "sb-access-token"


class StripeConfig(BaseModel):
    """Stripe Checkout configuration.

    Env-overridable via STRIPE__KEY format, e.g.:
        STRIPE__SECRET_KEY=sk_live_...
        STRIPE__PRICE_ID=price_...
        STRIPE__APP_BASE_URL=https://ghibli-art.example.com
    """

    secret_key: str = ""
    price_id: str = ""
    app_base_url: str = "http://localhost:3000"
    success_path: str = "/checkout/success"
    cancel_path: str = "/checkout/cancel"
    payment_method_types: list[str] = ["card"]

    @property
    def checkout_success_url(self) -> str:
        # Stripe substitutes {CHECKOUT_SESSION_ID} when redirecting back
        return f"{self.app_base_url.rstrip('/')}{self.success_path}?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def checkout_cancel_url(self) -> str:
        return f"{self.app_base_url.rstrip('/')}{self.cancel_path}"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    # API Keys
    openai_api_key: str

    # Signs the entitlement cookies
    session_secret: str

    # Supabase (identity provider)
    supabase_url: str = ""
    supabase_publishable_key: str = ""

    # LangSmith / Observability
    langsmith_api_key: str = ""
    langsmith_project: str = "ghibli-art"
    langchain_tracing_v2: bool = False  # Explicit opt-in

    # App Settings
    environment: str = "development"
    debug: bool = False
    cors_origins: list[str] = ["http://localhost:3000"]

    # Nested config groups (env-overridable via SECTION__KEY format)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    cookies: CookieConfig = Field(default_factory=CookieConfig)
    stripe: StripeConfig = Field(default_factory=StripeConfig)

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
