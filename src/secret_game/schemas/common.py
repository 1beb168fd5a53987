"""Shared Pydantic base models for API payloads."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model speaking camelCase on the wire and snake_case in Python.

    Existing web clients send and expect camelCase keys; snake_case input is
    still accepted.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
