"""Gemini generateContent client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import API_BASE_URL, API_KEY, MODEL, REQUEST_TIMEOUT
from .exceptions import ServiceUnavailableError

logger = logging.getLogger(__name__)


class GeminiClient:
    """Sends a single text prompt to the generateContent endpoint."""

    def __init__(
        self,
        api_key: str | None = API_KEY,
        model: str = MODEL,
        base_url: str = API_BASE_URL,
        timeout: float = REQUEST_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate_content(self, prompt: str) -> dict[str, Any]:
        """POST the prompt and return the decoded JSON reply.

        Raises ServiceUnavailableError on a missing key, a transport
        failure, a non-success status or a body that is not a JSON object.
        """
        if not self.api_key:
            raise ServiceUnavailableError("GEMINI_API_KEY is not set")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint, params={"key": self.api_key}, json=payload
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            raise ServiceUnavailableError(
                f"Gemini API returned {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ServiceUnavailableError(f"Gemini API request failed: {exc}") from exc
        except ValueError as exc:
            raise ServiceUnavailableError("Gemini API returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise ServiceUnavailableError("Gemini API returned an unexpected payload")

        logger.debug("Received reply from %s", self.model)
        return data


def extract_text(data: dict[str, Any]) -> str | None:
    """Pull candidates[0].content.parts[0].text out of a reply, if present."""
    node: Any = data
    for step in ("candidates", 0, "content", "parts", 0, "text"):
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                return None
        elif not isinstance(node, dict) or step not in node:
            return None
        node = node[step]
    return node if isinstance(node, str) else None
