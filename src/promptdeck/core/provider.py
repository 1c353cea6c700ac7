"""Completion provider client.

Thin wrapper around the ``openai`` SDK's :class:`~openai.AsyncOpenAI` client.
The proxy routes talk to the provider only through :class:`CompletionProvider`
so that tests can substitute a fake with the same two coroutine methods.

The SDK client is created lazily on first use.  Creating it eagerly would
fail at startup when no credential is configured, while the proxy is
expected to keep running and answer with a configuration error instead.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from openai import AsyncOpenAI

    from promptdeck.core.config import PromptdeckConfig

logger = logging.getLogger(__name__)


class CompletionProvider:
    """Adapter over the OpenAI chat completion and image endpoints."""

    def __init__(self, settings: PromptdeckConfig) -> None:
        self.settings = settings
        self._client: AsyncOpenAI | None = None

    @property
    def client(self) -> AsyncOpenAI:
        """Return the SDK client, creating it on first access.

        Raises:
            ValueError: If no provider credential is configured.
        """
        if self._client is None:
            from openai import AsyncOpenAI

            if not self.settings.has_provider_credential:
                raise ValueError("OpenAI API key is not set.")
            self._client = AsyncOpenAI(
                api_key=self.settings.openai_api_key,
                timeout=self.settings.request_timeout,
            )
        return self._client

    async def complete(self, messages: list[dict[str, str]]) -> list[dict[str, Any]]:
        """Request exactly one chat completion choice.

        Args:
            messages: Role/content pairs in upstream order (system turn first).

        Returns:
            The returned choices' messages as ``{"role", "content"}`` dicts.
            The list is empty when the provider produced no choice.
        """
        logger.debug(f"Requesting completion with {len(messages)} messages")
        response = await self.client.chat.completions.create(
            model=self.settings.code_model,
            messages=messages,
            n=1,
        )
        return [
            {"role": choice.message.role, "content": choice.message.content}
            for choice in (response.choices or [])
        ]

    async def generate_images(self, prompt: str, amount: int, resolution: str) -> list[str]:
        """Generate ``amount`` images and return their URLs in provider order."""
        logger.debug(f"Requesting {amount} image(s) at {resolution}")
        response = await self.client.images.generate(
            model=self.settings.image_model,
            prompt=prompt,
            n=amount,
            size=resolution,
        )
        return [image.url for image in (response.data or []) if image.url]

    async def close(self) -> None:
        """Close the underlying HTTP connections, if any were opened."""
        if self._client is not None:
            await self._client.close()
            self._client = None
