"""Shared base model for browser-facing JSON payloads."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes snake_case fields as camelCase (``image_url`` -> ``imageUrl``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
