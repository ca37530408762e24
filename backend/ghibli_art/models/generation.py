"""Style, upload and image result models."""

import base64
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, Field

from ghibli_art.constants import INLINE_IMAGE_MIME_TYPE
from ghibli_art.models.base import CamelModel


class Style(str, Enum):
    """Stylistic presets, keyed by their wire identifiers."""

    INSPIRED = "ghibli-inspired"
    SOFT_PASTEL = "ghibli-soft-pastel"
    FILMIC = "ghibli-filmic"

    @classmethod
    def default(cls) -> "Style":
        return cls.INSPIRED

    @classmethod
    def from_identifier(cls, identifier: str | None) -> "Style":
        """Resolve a form value; absent or unknown identifiers fall back to the default."""
        if not identifier:
            return cls.default()
        try:
            return cls(identifier.strip())
        except ValueError:
            return cls.default()


STYLE_LABELS: dict[Style, str] = {
    Style.INSPIRED: "Ghibli Inspired - Vibrant & Whimsical",
    Style.SOFT_PASTEL: "Ghibli Soft Pastel - Dreamy & Gentle",
    Style.FILMIC: "Ghibli Filmic - Cinematic & Dramatic",
}


class ImageUpload(BaseModel):
    """A validated uploaded photo."""

    filename: str
    content_type: str
    content: bytes


class UrlImage(BaseModel):
    """Provider returned a hosted image URL."""

    kind: Literal["url"] = "url"
    url: str

    @property
    def display_url(self) -> str:
        return self.url


class InlineImage(BaseModel):
    """Provider returned the image bytes inline (base64 on the wire)."""

    kind: Literal["inline"] = "inline"
    data: bytes
    mime_type: str = INLINE_IMAGE_MIME_TYPE

    @property
    def display_url(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


ImageResult = Annotated[UrlImage | InlineImage, Field(discriminator="kind")]


class GenerationResponse(CamelModel):
    """Successful generation payload."""

    image_url: str
    style: Style


class StyleOption(CamelModel):
    id: Style
    label: str


class ClientConfigResponse(CamelModel):
    """Limits and presets the browser needs for its own pre-checks."""

    max_upload_bytes: int
    accepted_mime_prefix: str
    default_style: Style
    styles: list[StyleOption]
