"""OpenAI Responses API client for image captions."""

import base64
import json
from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from label_tracker.errors import ServiceSubmissionError
from label_tracker.services.description import CaptionClient

CAPTION_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "captions": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "text": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0.0, "maximum": 1.0},
                },
                "required": ["text", "confidence"],
                "additionalProperties": False,
            },
        }
    },
    "required": ["captions"],
    "additionalProperties": False,
}

CAPTION_PROMPT = (
    "Describe the image in one short sentence, the way an image captioning "
    "service would, for example 'a group of apples on a table'. "
    "Name each visible food item and use plurals when there are several."
)


@dataclass
class OpenAICaptionClient(CaptionClient):
    """Caption client backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAICaptionClient":
        """Create an OpenAI caption client."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def describe(self, image_bytes: bytes) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": CAPTION_PROMPT},
                        {"type": "input_image", "image_url": _to_data_url(image_bytes)},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": "image_captions",
                    "strict": True,
                    "schema": CAPTION_SCHEMA,
                }
            },
            "store": False,
        }
        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise ServiceSubmissionError(f"OpenAI caption failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise ServiceSubmissionError("OpenAI returned an empty response")
        try:
            return json.loads(output_text)
        except ValueError as exc:
            raise ServiceSubmissionError("OpenAI returned invalid JSON") from exc

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()


def _to_data_url(image_bytes: bytes) -> str:
    """Convert bytes to a base64 data URL for image input."""
    mime_type = _detect_mime_type(image_bytes)
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    return "image/jpeg"
