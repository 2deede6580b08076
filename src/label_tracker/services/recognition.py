"""Text recognition service polling an asynchronous OCR operation."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from label_tracker.domain.vision import ReadOperation
from label_tracker.errors import (
    RecognitionFailedError,
    RecognitionTimeoutError,
    ServiceSubmissionError,
)

_logger = logging.getLogger(__name__)


class ReadClient(Protocol):
    """Interface for an asynchronous OCR read API."""

    async def submit_read(self, image_bytes: bytes) -> str:
        """Submit an image and return the operation id."""

    async def get_read_result(self, operation_id: str) -> dict[str, object]:
        """Return the raw status payload of a read operation."""


@dataclass
class TextRecognitionService:
    """Service that runs a read operation to completion."""

    client: ReadClient
    poll_interval_seconds: float = 1.0
    max_poll_attempts: int = 60

    async def recognize(self, image_bytes: bytes) -> str:
        """Return the recognized text of an image."""
        operation_id = await self.client.submit_read(image_bytes)
        _logger.debug("Submitted read operation %s", operation_id)

        for attempt in range(1, self.max_poll_attempts + 1):
            raw = await self.client.get_read_result(operation_id)
            try:
                operation = ReadOperation.model_validate(raw)
            except ValidationError as exc:
                raise ServiceSubmissionError(
                    f"Unexpected read operation payload: {exc}"
                ) from exc
            if operation.is_terminal:
                _logger.debug("Read operation %s response: %s", operation_id, raw)
                break
            _logger.debug(
                "Read operation %s is %s (poll %s/%s)",
                operation_id,
                operation.status,
                attempt,
                self.max_poll_attempts,
            )
            await asyncio.sleep(self.poll_interval_seconds)
        else:
            raise RecognitionTimeoutError(
                f"Read operation {operation_id} did not finish after "
                f"{self.max_poll_attempts} polls"
            )

        if operation.status == "failed":
            raise RecognitionFailedError(f"Text recognition failed ({operation_id})")
        return operation.text()
