"""Validation error payloads returned with HTTP 400."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ValidationFailure(BaseModel):
    """A single failed rule: which property, and why."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    property_name: str
    error_message: str
