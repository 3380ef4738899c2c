"""Description: Passthrough client for the Gemini generateContent REST endpoint."""

import logging
import time
from typing import Any, Dict

import httpx

from utils.errors import RelayError
from utils.settings import Settings

LOGGER = logging.getLogger(__name__)


class GeminiRelay:
    """Forward analysis payloads to Gemini and hand back the raw JSON body."""

    def __init__(self, client: httpx.AsyncClient, settings: Settings) -> None:
        """Initialize the relay with a shared async HTTP client."""
        if client is None:
            raise ValueError("HTTP client must be provided.")
        if not settings.gemini_api_key:
            raise ValueError("Gemini API key must be configured.")
        self.client = client
        self.url = settings.generate_content_url
        self._api_key = settings.gemini_api_key

    async def forward(self, payload: Dict[str, Any]) -> Any:
        """POST `payload` upstream and return the parsed response body.

        The body is returned as-is regardless of the upstream status code, so
        API errors reported by Gemini reach the caller unchanged.

        Raises:
            RelayError: If the request cannot complete or the body is not JSON.
        """
        start_time = time.time()
        try:
            response = await self.client.post(
                self.url,
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.HTTPError as exc:
            LOGGER.error("Error during Gemini generateContent call: %s", exc)
            raise RelayError("Upstream request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            LOGGER.error("Unparseable Gemini response (status %s): %r", response.status_code, response.text[:500])
            raise RelayError("Upstream returned a non-JSON body") from exc

        LOGGER.info(
            "Gemini relay status=%s latency=%.3fs", response.status_code, time.time() - start_time
        )
        return data
