"""Pydantic request and response models for the Promptdeck API.

These models define the JSON schema of the relay endpoints.  The routes
validate request bodies against them explicitly (rather than through
FastAPI's automatic body parsing) so that authentication and configuration
checks run before any body validation, and so that malformed bodies map to
``400`` instead of FastAPI's default ``422``.

Models
------
ChatMessage
    One caller-supplied turn (``user`` or ``assistant``).
ConversationRequest
    Payload for ``POST /api/code``.
AssistantTurn
    Success body for ``POST /api/code``.
ImageRequest
    Payload for ``POST /api/image``.
ImageResult
    One element of the ``POST /api/image`` success body.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AMOUNT_OPTIONS: tuple[str, ...] = ("1", "2", "3", "4", "5")
RESOLUTION_OPTIONS: tuple[str, ...] = ("256x256", "512x512", "1024x1024")


class ChatMessage(BaseModel):
    """A caller-supplied conversation turn.

    The ``system`` role is not accepted here: the only system turn in an
    upstream request is the one the proxy injects.

    Attributes:
        id: Client-generated identifier.  Not forwarded upstream.
        role: ``"user"`` or ``"assistant"``.
        content: Free-form text.
    """

    id: str | None = Field(
        default=None,
        description="Client-generated turn identifier.",
    )
    role: Literal["user", "assistant"] = Field(
        ...,
        description="Turn author: 'user' or 'assistant'.",
    )
    content: str = Field(
        ...,
        description="Turn text (may contain markdown).",
    )

    def to_upstream(self) -> dict[str, str]:
        """Return the role/content pair sent to the provider."""
        return {"role": self.role, "content": self.content}


class ConversationRequest(BaseModel):
    """Request body for ``POST /api/code``.

    Attributes:
        messages: The full transcript, oldest first.  Must not be empty.
    """

    messages: list[ChatMessage] = Field(
        ...,
        min_length=1,
        description="Conversation turns, oldest first.",
    )


class AssistantTurn(BaseModel):
    """Response body for a successful ``POST /api/code``."""

    role: Literal["assistant"] = "assistant"
    content: str = Field(
        default="",
        description="Provider-supplied completion text, verbatim.",
    )


class ImageRequest(BaseModel):
    """Request body for ``POST /api/image``.

    Attributes:
        prompt: Description of the image to generate.
        amount: Number of images as a string (``"1"`` to ``"5"``).
        resolution: One of :data:`RESOLUTION_OPTIONS`.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    prompt: str = Field(
        ...,
        description="Image description.",
    )
    amount: str = Field(
        default="1",
        description="Number of images to generate ('1'-'5').",
    )
    resolution: str = Field(
        default="512x512",
        description="Image size, e.g. '512x512'.",
    )


class ImageResult(BaseModel):
    """A single generated image."""

    url: str
