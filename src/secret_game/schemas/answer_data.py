"""Typed payloads stored alongside an answer's text body.

``answer_data`` used to be an untyped blob whose shape depended on the answer
type. It is modelled here as a discriminated union keyed by ``type`` so the
services can validate it while new answer types stay easy to add.
"""
from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter, field_validator

from secret_game.core.settings import settings
from secret_game.schemas.common import CamelModel

SUPPORTED_IMAGE_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})


class TextAnswer(CamelModel):
    """Plain text answer; the secret body is the primary content."""

    type: Literal["text"] = "text"
    text: str | None = None


class SliderAnswer(CamelModel):
    """A point on a numeric scale."""

    type: Literal["slider"] = "slider"
    value: float


class MultipleChoiceAnswer(CamelModel):
    """One or more selected options."""

    type: Literal["multipleChoice"] = "multipleChoice"
    selected: list[str] = Field(..., min_length=1)


class ImageUploadAnswer(CamelModel):
    """An inline image, base64 encoded."""

    type: Literal["imageUpload"] = "imageUpload"
    image_base64: str = Field(..., min_length=1)
    caption: str | None = None
    mime_type: str | None = None
    file_size: int | None = Field(default=None, ge=0)
    file_name: str | None = None

    @field_validator("mime_type")
    @classmethod
    def _check_mime_type(cls, value: str | None) -> str | None:
        if value is not None and value not in SUPPORTED_IMAGE_MIME_TYPES:
            raise ValueError("Unsupported image format. Please use JPG, PNG, GIF, or WebP")
        return value

    @field_validator("file_size")
    @classmethod
    def _check_file_size(cls, value: int | None) -> int | None:
        if value is not None and value > settings.image_max_bytes:
            limit_mb = settings.image_max_bytes / (1024 * 1024)
            raise ValueError(f"Image must be under {limit_mb:g}MB")
        return value


AnswerData = Annotated[
    TextAnswer | SliderAnswer | MultipleChoiceAnswer | ImageUploadAnswer,
    Field(discriminator="type"),
]

answer_data_adapter: TypeAdapter[AnswerData] = TypeAdapter(AnswerData)


def dump_answer_data(data: AnswerData | None) -> dict[str, Any] | None:
    """Serialize a payload for the JSON column, camelCase keys included."""
    if data is None:
        return None
    return data.model_dump(by_alias=True, exclude_none=True)


__all__ = [
    "AnswerData",
    "ImageUploadAnswer",
    "MultipleChoiceAnswer",
    "SliderAnswer",
    "TextAnswer",
    "answer_data_adapter",
    "dump_answer_data",
]
