"""
Image generation service using the OpenAI Images API.

Sends the uploaded photo as the reference image together with a style prompt
and returns exactly one ImageResult.

## Attempt policy

Attempts run in order from ``[primary_prompt, FALLBACK_PROMPT]`` and stop at
the first success. MAX_GENERATION_ATTEMPTS bounds the list, so a failing
request costs at most one retry. Any failure (network error, provider
rejection, malformed result) counts as a failed attempt; after the last one
a ProviderError carrying the last failure's message is raised.

## Result shapes

The API answers with either a hosted ``url`` or an inline ``b64_json``
payload. image_result_from_response() resolves that once into UrlImage or
InlineImage so callers never inspect the raw response.

Usage:
    generator = ImageGenerationService(openai_api_key="...")
    result = await generator.generate(upload, resolve_prompt(Style.FILMIC))
    result.display_url  # https://... or data:image/png;base64,...
"""

import base64
import binascii
from typing import Any

import structlog

from ghibli_art.config import GenerationConfig
from ghibli_art.constants import (
    ERROR_GENERATION_FAILED,
    INLINE_IMAGE_MIME_TYPE,
    MAX_GENERATION_ATTEMPTS,
)
from ghibli_art.errors import ProviderError, error_message
from ghibli_art.models.generation import ImageResult, ImageUpload, InlineImage, UrlImage
from ghibli_art.prompts.styles import FALLBACK_PROMPT
from ghibli_art.services.openai_client import get_openai_client

logger = structlog.get_logger(__name__)


class MalformedImageResultError(ValueError):
    """The provider answered without a usable image."""


def image_result_from_response(response: Any) -> ImageResult:
    """Resolve an Images API response into a UrlImage or InlineImage."""
    data = getattr(response, "data", None) or []
    if not data:
        raise MalformedImageResultError("No image returned")

    first = data[0]
    url = getattr(first, "url", None)
    if url:
        return UrlImage(url=url)

    payload = getattr(first, "b64_json", None)
    if payload:
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedImageResultError("Invalid base64 image payload") from e
        return InlineImage(data=raw, mime_type=INLINE_IMAGE_MIME_TYPE)

    raise MalformedImageResultError("No image URL returned")


def attempt_prompts(primary_prompt: str) -> list[str]:
    """Prompts tried in order, bounded by MAX_GENERATION_ATTEMPTS."""
    return [primary_prompt, FALLBACK_PROMPT][:MAX_GENERATION_ATTEMPTS]


class ImageGenerationService:
    """Stylizes an uploaded photo through OpenAI."""

    def __init__(
        self,
        openai_api_key: str,
        config: GenerationConfig | None = None,
    ) -> None:
        """
        Initialize the generator.

        Args:
            openai_api_key: OpenAI API key
            config:         Model, output size and upload limits.
        """
        self.config = config or GenerationConfig()
        self.client = get_openai_client(openai_api_key, self.config)

    async def _generate_once(self, upload: ImageUpload, prompt: str) -> ImageResult:
        response = await self.client.images.edit(
            model=self.config.model,
            image=(upload.filename, upload.content, upload.content_type),
            prompt=prompt,
            size=self.config.size,
            n=1,
        )
        return image_result_from_response(response)

    async def generate(self, upload: ImageUpload, prompt: str) -> ImageResult:
        """
        Generate one stylized image.

        Args:
            upload: Validated photo used as the reference image.
            prompt: Primary prompt (style template or user override).

        Returns:
            UrlImage or InlineImage.

        Raises:
            ProviderError: every attempt failed.
        """
        prompts = attempt_prompts(prompt)
        last_error: Exception | None = None

        for attempt, attempt_prompt in enumerate(prompts, start=1):
            try:
                result = await self._generate_once(upload, attempt_prompt)
            except Exception as e:
                last_error = e
                logger.warning(
                    "image_generation_attempt_failed",
                    attempt=attempt,
                    max_attempts=len(prompts),
                    fallback=attempt > 1,
                    error=error_message(e),
                )
                continue

            logger.info(
                "image_generated",
                attempt=attempt,
                model=self.config.model,
                result_kind=result.kind,
            )
            return result

        logger.error("image_generation_failed", attempts=len(prompts), error=error_message(last_error))
        raise ProviderError(ERROR_GENERATION_FAILED, details=error_message(last_error))

    async def close(self) -> None:
        await self.client.close()
