"""Azure Computer Vision REST client for OCR and captions."""

from dataclasses import dataclass

import httpx

from label_tracker.config import normalize_endpoint
from label_tracker.errors import ServiceSubmissionError
from label_tracker.services.description import CaptionClient
from label_tracker.services.recognition import ReadClient

_KEY_HEADER = "Ocp-Apim-Subscription-Key"


@dataclass
class AzureVisionClient(ReadClient, CaptionClient):
    """Vision client backed by the Azure Read and Describe APIs."""

    endpoint: str
    api_key: str
    http_client: httpx.AsyncClient
    api_version: str = "v3.2"
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls,
        endpoint: str,
        api_key: str,
        api_version: str = "v3.2",
        timeout_seconds: float = 30.0,
    ) -> "AzureVisionClient":
        """Create an Azure vision client with a managed httpx session."""
        return cls(
            endpoint=normalize_endpoint(endpoint),
            api_key=api_key,
            http_client=httpx.AsyncClient(),
            api_version=api_version,
            timeout_seconds=timeout_seconds,
        )

    async def submit_read(self, image_bytes: bytes) -> str:
        """Start a read operation and return its operation id."""
        try:
            response = await self.http_client.post(
                self._url("read/analyze"),
                headers=self._headers(binary=True),
                content=image_bytes,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ServiceSubmissionError(f"Azure read submit failed: {exc}") from exc
        location = response.headers.get("Operation-Location")
        if not location:
            raise ServiceSubmissionError(
                "Azure read response is missing the Operation-Location header"
            )
        return location.rstrip("/").rsplit("/", 1)[-1]

    async def get_read_result(self, operation_id: str) -> dict[str, object]:
        """Fetch the current status payload of a read operation."""
        try:
            response = await self.http_client.get(
                self._url(f"read/analyzeResults/{operation_id}"),
                headers=self._headers(),
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ServiceSubmissionError(f"Azure read polling failed: {exc}") from exc
        return _json_object(response, "read result")

    async def describe(self, image_bytes: bytes) -> dict[str, object]:
        """Request caption candidates for an image."""
        try:
            response = await self.http_client.post(
                self._url("describe"),
                params={"maxCandidates": 1, "language": "en"},
                headers=self._headers(binary=True),
                content=image_bytes,
                timeout=self.timeout_seconds,
            )
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise ServiceSubmissionError(f"Azure describe failed: {exc}") from exc
        payload = _json_object(response, "describe")
        return payload.get("description") or {}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    def _url(self, path: str) -> str:
        return f"{self.endpoint}/vision/{self.api_version}/{path}"

    def _headers(self, binary: bool = False) -> dict[str, str]:
        headers = {_KEY_HEADER: self.api_key}
        if binary:
            headers["Content-Type"] = "application/octet-stream"
        return headers


def _json_object(response: httpx.Response, action: str) -> dict[str, object]:
    try:
        payload = response.json()
    except ValueError as exc:
        raise ServiceSubmissionError(f"Azure {action} returned invalid JSON") from exc
    if not isinstance(payload, dict):
        raise ServiceSubmissionError(f"Azure {action} returned a non-object payload")
    return payload
