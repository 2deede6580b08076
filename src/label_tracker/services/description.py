"""Image description service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from label_tracker.domain.vision import ImageDescription
from label_tracker.errors import ServiceSubmissionError

_logger = logging.getLogger(__name__)


class CaptionClient(Protocol):
    """Interface for an image captioning API."""

    async def describe(self, image_bytes: bytes) -> dict[str, object]:
        """Return raw caption candidates as ``{"captions": [...]}``."""


@dataclass
class ImageDescriptionService:
    """Service that returns the best caption for an image."""

    client: CaptionClient

    async def describe(self, image_bytes: bytes) -> str:
        """Return the top caption text, or an empty string when none came back."""
        raw = await self.client.describe(image_bytes)
        _logger.debug("Caption response: %s", raw)
        try:
            description = ImageDescription.model_validate(raw)
        except ValidationError as exc:
            raise ServiceSubmissionError(f"Unexpected caption payload: {exc}") from exc
        if not description.captions:
            _logger.warning("Caption service returned no captions")
            return ""
        return description.captions[0].text
