"""HTTP client the UI uses to reach the relay server.

Each call opens its own ``httpx.AsyncClient`` so that concurrent submissions
from the same session never share connection state and nothing needs to be
closed when a session ends.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from promptdeck.core.config import PromptdeckConfig

logger = logging.getLogger(__name__)

SEND_FAILED_MESSAGE = "Failed to send message. Please try again."
IMAGE_FAILED_MESSAGE = "Failed to generate image. Please try again."


class RelayRequestError(Exception):
    """A relay call failed.

    ``message`` is safe to show to the user.  ``status_code`` is ``None``
    for transport failures that produced no HTTP response.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def error_message_from_response(response: httpx.Response, fallback: str) -> str:
    """Derive a user-facing message from a failed response.

    Uses the ``message`` field of a structured (JSON object) body when there
    is one, and ``fallback`` otherwise.
    """
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict):
        message = data.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return fallback


class RelayClient:
    """Client for the ``/api/code`` and ``/api/image`` relay endpoints.

    Args:
        base_url: Proxy base URL, e.g. ``http://127.0.0.1:3000``
        user_id: Caller id sent in ``identity_header``.  Omitted when ``None``.
        identity_header: Header name the proxy reads the caller id from
        timeout: Timeout in seconds for one round trip
        transport: Optional httpx transport (used by tests)
    """

    def __init__(
        self,
        base_url: str,
        *,
        user_id: str | None = None,
        identity_header: str = "X-User-Id",
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.user_id = user_id
        self.identity_header = identity_header
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_config(cls, settings: PromptdeckConfig) -> RelayClient:
        return cls(
            settings.api_base_url,
            user_id=settings.ui_user_id,
            identity_header=settings.identity_header,
            timeout=settings.request_timeout,
        )

    def _headers(self) -> dict[str, str]:
        if self.user_id:
            return {self.identity_header: self.user_id}
        return {}

    async def _post(self, path: str, payload: dict[str, Any], fallback: str) -> Any:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.post(path, json=payload, headers=self._headers())
        except httpx.HTTPError as exc:
            logger.error(f"Request to {path} failed: {exc}")
            raise RelayRequestError(fallback) from exc

        if response.status_code != 200:
            logger.error(f"{path} returned {response.status_code}: {response.text}")
            raise RelayRequestError(
                error_message_from_response(response, fallback),
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            logger.error(f"{path} returned a non-JSON body: {response.text}")
            raise RelayRequestError(fallback, status_code=response.status_code) from exc

    async def send_conversation(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Post the full transcript and return the assistant turn body.

        Raises:
            RelayRequestError: On any transport failure or non-200 response.
        """
        data = await self._post("/api/code", {"messages": messages}, SEND_FAILED_MESSAGE)
        return data if isinstance(data, dict) else {}

    async def generate_images(self, prompt: str, amount: str, resolution: str) -> list[str]:
        """Post the image form and return the image URLs in response order.

        Raises:
            RelayRequestError: On any failure, including a malformed body.
        """
        data = await self._post(
            "/api/image",
            {"prompt": prompt, "amount": amount, "resolution": resolution},
            IMAGE_FAILED_MESSAGE,
        )
        try:
            return [image["url"] for image in data]
        except (TypeError, KeyError) as exc:
            logger.error(f"Unexpected image response: {data!r}")
            raise RelayRequestError(IMAGE_FAILED_MESSAGE) from exc
