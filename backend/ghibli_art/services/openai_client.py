"""OpenAI client factory for the image generation service."""

import os

from openai import AsyncOpenAI

from ghibli_art.config import GenerationConfig, get_settings


def get_openai_client(
    api_key: str | None = None,
    config: GenerationConfig | None = None,
) -> AsyncOpenAI:
    """
    Build the AsyncOpenAI client used for ``images.edit`` calls.

    The request timeout and SDK retry count come from the generation config,
    so a slow image edit fails into the fallback attempt instead of hanging
    the upload request. Wrapped with LangSmith when LANGCHAIN_TRACING_V2 is on.

    Args:
        api_key: OpenAI API key. Defaults to settings.openai_api_key.
        config:  Generation settings. Defaults to settings.generation.
    """
    key = api_key or get_settings().openai_api_key
    generation = config or get_settings().generation

    client = AsyncOpenAI(
        api_key=key,
        timeout=generation.timeout_seconds,
        max_retries=generation.max_retries,
    )

    if os.getenv("LANGCHAIN_TRACING_V2", "").lower() == "true":
        from langsmith.wrappers import wrap_openai

        client = wrap_openai(client)

    return client
