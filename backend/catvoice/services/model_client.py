"""Model client adapter: the only place that talks to the generative model."""
import asyncio
import base64
import binascii
import time
from abc import ABC, abstractmethod
from typing import Optional, Sequence

from google import genai
from google.genai import types
from pydantic import BaseModel, ConfigDict

from catvoice.core.config import Settings
from catvoice.core.errors import GenerationFailedError
from catvoice.core.logging import setup_logging
from catvoice.models.content import ContentBlock, ImageBlock, TextBlock

logger = setup_logging("model_client")


class ModelConfig(BaseModel):
    """Immutable connection settings for the model client."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    project_id: str
    location: str
    model_id: str
    timeout_seconds: float = 60.0
    thinking_budget: Optional[int] = 0

    @classmethod
    def from_settings(cls, settings: Settings) -> "ModelConfig":
        return cls(
            project_id=settings.gcp_project_id,
            location=settings.vertex_ai_location,
            model_id=settings.model_id,
            timeout_seconds=settings.model_timeout_seconds,
            thinking_budget=settings.model_thinking_budget,
        )


class ModelClient(ABC):
    """Submit a prompt plus optional inline images, receive generated text."""

    @abstractmethod
    async def generate(
        self,
        content: Sequence[ContentBlock],
        system_prompt: Optional[str] = None,
        max_tokens: int = 1024,
    ) -> str:
        """Run one generation.

        Args:
            content: Ordered text and image blocks. Order is preserved.
            system_prompt: Optional system instruction.
            max_tokens: Upper bound on generated tokens.

        Returns:
            Raw text produced by the model.

        Raises:
            GenerationFailedError: On any transport, provider or timeout error.
        """


def _decode_image(block: ImageBlock) -> tuple[bytes, str]:
    """Decode a base64 image, accepting an optional data URL prefix."""
    data = block.data
    mime_type = block.mime_type
    if data.startswith("data:") and "," in data:
        header, data = data.split(",", 1)
        mime_type = header[len("data:"):].split(";", 1)[0] or mime_type
    try:
        return base64.b64decode(data, validate=True), mime_type
    except (binascii.Error, ValueError) as exc:
        raise GenerationFailedError("Image payload is not valid base64") from exc


class GeminiModelClient(ModelClient):
    """ModelClient backed by Gemini on Vertex AI via google-genai.

    Holds only static configuration and a lazily created SDK client, so a
    single instance is shared across concurrent requests.
    No retries are performed here.
    """

    def __init__(self, config: ModelConfig) -> None:
        self.config = config
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(
                vertexai=True,
                project=self.config.project_id,
                location=self.config.location,
            )
        return self._client

    def _build_parts(self, content: Sequence[ContentBlock]) -> list[types.Part]:
        parts: list[types.Part] = []
        for block in content:
            if isinstance(block, TextBlock):
                parts.append(types.Part(text=block.text))
            else:
                image_bytes, mime_type = _decode_image(block)
                parts.append(
                    types.Part(inline_data=types.Blob(data=image_bytes, mime_type=mime_type))
                )
        return parts

    async def generate(
        self,
        content: Sequence[ContentBlock],
        system_prompt: Optional[str] = None,
        max_tokens: int = 1024,
    ) -> str:
        parts = self._build_parts(content)
        image_count = sum(1 for block in content if isinstance(block, ImageBlock))

        # Thinking tokens count against max_output_tokens on 2.5 models
        thinking_config = None
        if self.config.thinking_budget is not None:
            thinking_config = types.ThinkingConfig(thinking_budget=self.config.thinking_budget)

        _t0 = time.perf_counter()
        try:
            response = await asyncio.wait_for(
                self._get_client().aio.models.generate_content(
                    model=self.config.model_id,
                    contents=[types.Content(role="user", parts=parts)],
                    config=types.GenerateContentConfig(
                        system_instruction=system_prompt,
                        max_output_tokens=max_tokens,
                        thinking_config=thinking_config,
                    ),
                ),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            logger.error(
                "Model call timed out after %.1fs",
                self.config.timeout_seconds,
                extra={"error_type": "TimeoutError"},
            )
            raise GenerationFailedError("Model call timed out") from exc
        except Exception as exc:
            logger.error(
                "Model call failed: %s: %s",
                type(exc).__name__,
                exc,
                extra={"error_type": type(exc).__name__},
            )
            raise GenerationFailedError("Model call failed") from exc

        elapsed_ms = int((time.perf_counter() - _t0) * 1000)
        logger.info(
            "Model call: model=%s images=%d",
            self.config.model_id,
            image_count,
            extra={"elapsed_ms": elapsed_ms},
        )

        text = response.text
        if not text:
            raise GenerationFailedError("Model returned no text")
        return text
