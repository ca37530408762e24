"""
Business logic constants for the Ghibli Art application.

These values are stable across environments (dev/staging/prod) and do not
need env-var overrides. For operational parameters that vary per environment
(model, upload ceiling, cookie lifetimes), see config.py.
"""

API_TITLE = "Ghibli Art API"
API_VERSION = "0.1.0"
SERVICE_NAME = "ghibli-art-api"

# --- Upload validation ---
ACCEPTED_MIME_PREFIX = "image/"
DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024  # 5 MiB

# --- Cookie lifetimes ---
ONE_YEAR_SECONDS = 60 * 60 * 24 * 365
THIRTY_DAYS_SECONDS = 60 * 60 * 24 * 30

# itsdangerous salt for entitlement cookie signatures
ENTITLEMENT_COOKIE_SALT = "entitlement-flag"

# --- Generation attempt policy ---
# Primary prompt, then exactly one retry with FALLBACK_PROMPT
MAX_GENERATION_ATTEMPTS = 2

# gpt-image-1 returns base64 PNG payloads
INLINE_IMAGE_MIME_TYPE = "image/png"

# --- Error messages returned to the browser ---
ERROR_NO_FILE = "No file provided"
ERROR_INVALID_FILE_TYPE = "Invalid file type"
ERROR_FILE_TOO_LARGE = "File too large"
ERROR_PROMPT_TOO_LONG = "Prompt too long"
ERROR_INVALID_REQUEST = "Invalid request"
ERROR_TRIAL_USED = "Trial used, please subscribe"
ERROR_SUBSCRIPTION_REQUIRED = "Subscription required"
ERROR_GENERATION_FAILED = "Generation failed"
ERROR_CHECKOUT_FAILED = "Failed to create checkout session"
ERROR_MISSING_SESSION_ID = "Missing session_id"
ERROR_VERIFY_FAILED = "Failed to verify session"
