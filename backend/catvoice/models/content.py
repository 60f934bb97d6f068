"""Provider-neutral content blocks passed to the model client."""
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict


class TextBlock(BaseModel):
    """A plain text part of a prompt."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ImageBlock(BaseModel):
    """An inline base64-encoded image part of a prompt."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image"] = "image"
    data: str
    mime_type: str = "image/jpeg"


ContentBlock = Union[TextBlock, ImageBlock]
