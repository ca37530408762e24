"""
Ghibli Art Backend - Main FastAPI Application.

This is the entry point for the Ghibli Art backend API.
Users upload a photo, pick a style preset and receive a stylized image,
gated behind a one-time free trial and a Stripe subscription.

Run with:
    uvicorn ghibli_art.main:app --reload
"""

import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from supabase import acreate_client
from supabase._async.client import AsyncClient as AsyncSupabaseClient

from ghibli_art.api.billing import router as billing_router
from ghibli_art.api.generate import router as generate_router
from ghibli_art.api.me import router as me_router
from ghibli_art.config import get_settings
from ghibli_art.constants import API_TITLE, API_VERSION
from ghibli_art.errors import (
    GhibliArtError,
    ghibli_art_error_handler,
    request_validation_error_handler,
)
from ghibli_art.logging_config import setup_logging
from ghibli_art.middleware import RequestContextMiddleware
from ghibli_art.services.cookie_store import EntitlementCookieStore
from ghibli_art.services.image_generator import ImageGenerationService
from ghibli_art.services.stripe_service import StripeService

# Get settings before logging setup so we know the debug flag
settings = get_settings()

# Propagate LangSmith settings into os.environ so the SDK can find them.
# pydantic-settings reads .env into the Settings model but does NOT inject
# values into os.environ, which is where langsmith and openai_client.py look.
if settings.langchain_tracing_v2 and settings.langsmith_api_key:
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGSMITH_API_KEY"] = settings.langsmith_api_key
    os.environ["LANGSMITH_PROJECT"] = settings.langsmith_project

# Configure logging
setup_logging(settings.debug, settings.environment)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan event handler for startup and shutdown."""
    current = get_settings()
    logger.info("api_startup", cors_origins=current.cors_origins, environment=current.environment)

    # Identity provider (optional: without it every caller is anonymous)
    supabase_client: AsyncSupabaseClient | None = None
    if current.supabase_url and current.supabase_publishable_key:
        try:
            supabase_client = await acreate_client(
                current.supabase_url,
                current.supabase_publishable_key,
            )
            logger.info("supabase_configured")
        except Exception as e:
            logger.warning("supabase_init_failed", error=str(e))
    else:
        logger.warning("supabase_not_configured", detail="All callers will be treated as anonymous")

    # Payment provider (optional: checkout endpoints answer 500 without it)
    stripe_service: StripeService | None = None
    if current.stripe.secret_key:
        stripe_service = StripeService(current.stripe)
        logger.info("stripe_configured")
    else:
        logger.warning("stripe_not_configured", detail="Checkout endpoints will fail")

    image_generator = ImageGenerationService(current.openai_api_key, current.generation)

    _app.state.supabase = supabase_client
    _app.state.stripe_service = stripe_service
    _app.state.image_generator = image_generator
    _app.state.cookie_store = EntitlementCookieStore(
        current.session_secret,
        current.cookies,
        secure=current.is_production,
    )

    logger.info("services_initialized", generation_model=current.generation.model)

    yield

    await image_generator.close()
    logger.info("api_shutdown")


# Create FastAPI app
app = FastAPI(
    title=API_TITLE,
    description=(
        "Turns an uploaded photo into a Studio Ghibli style illustration. "
        "Anonymous visitors get one free generation; afterwards a subscription is required."
    ),
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_exception_handler(GhibliArtError, ghibli_art_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_error_handler)

# Request context middleware must come before CORS so every response gets
# the X-Request-ID header (including preflight OPTIONS responses).
app.add_middleware(RequestContextMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(generate_router, prefix="/api")
app.include_router(me_router, prefix="/api")
app.include_router(billing_router, prefix="/api")


@app.get("/")
async def root() -> dict:
    """Root endpoint with API info."""
    return {
        "name": API_TITLE,
        "version": API_VERSION,
        "description": "Studio Ghibli style photo generation",
        "docs": "/docs",
    }


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "healthy"}
