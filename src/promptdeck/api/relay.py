"""Request parsing and upstream message composition for the relay routes.

This module keeps the body validation and the system-turn injection out of
``promptdeck.api.main`` so the route handlers only deal with ordering of
checks and error mapping, and so the composition rules are testable as
plain functions.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from promptdeck.api.errors import BadRequest
from promptdeck.api.models import (
    AMOUNT_OPTIONS,
    RESOLUTION_OPTIONS,
    ChatMessage,
    ConversationRequest,
    ImageRequest,
)

MESSAGES_REQUIRED = "Messages must be a non-empty array."


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error.get('msg', 'invalid value')}"


def parse_conversation_request(body: Any) -> ConversationRequest:
    """Validate a decoded ``POST /api/code`` body.

    Args:
        body: The decoded JSON body (any JSON value).

    Returns:
        The validated request.

    Raises:
        BadRequest: If ``messages`` is missing, not a list, empty, or holds a
            malformed turn or a caller-supplied ``system`` turn.
    """
    messages = body.get("messages") if isinstance(body, dict) else None
    if not isinstance(messages, list) or not messages:
        raise BadRequest(MESSAGES_REQUIRED)

    for index, message in enumerate(messages):
        if isinstance(message, dict) and message.get("role") == "system":
            raise BadRequest(f"messages.{index}: system turns are not accepted")

    try:
        return ConversationRequest.model_validate({"messages": messages})
    except ValidationError as exc:
        raise BadRequest(f"Invalid message: {_first_error(exc)}") from exc


def compose_upstream_messages(
    system_instruction: str,
    messages: list[ChatMessage],
) -> list[dict[str, str]]:
    """Prepend the fixed system turn to the caller's turns.

    The caller's turns keep their order and content; only their role and
    content are forwarded.  A fresh list is built on every call so repeated
    requests with the same history each carry exactly one system turn.
    """
    upstream = [{"role": "system", "content": system_instruction}]
    upstream.extend(message.to_upstream() for message in messages)
    return upstream


def parse_image_request(body: Any) -> tuple[str, int, str]:
    """Validate a decoded ``POST /api/image`` body.

    Returns:
        Tuple of ``(prompt, amount, resolution)`` with ``amount`` as an int.

    Raises:
        BadRequest: For a missing prompt, amount or resolution, or values
            outside the supported options.
    """
    if not isinstance(body, dict):
        raise BadRequest("Request body must be a JSON object.")

    if not str(body.get("prompt") or "").strip():
        raise BadRequest("Prompt is required")
    if "amount" in body and not body["amount"]:
        raise BadRequest("Amount is required")
    if "resolution" in body and not body["resolution"]:
        raise BadRequest("Resolution is required")

    try:
        req = ImageRequest.model_validate(body)
    except ValidationError as exc:
        raise BadRequest(f"Invalid image request: {_first_error(exc)}") from exc

    if req.amount not in AMOUNT_OPTIONS:
        raise BadRequest(f"Amount must be one of {', '.join(AMOUNT_OPTIONS)}")
    if req.resolution not in RESOLUTION_OPTIONS:
        raise BadRequest(f"Resolution must be one of {', '.join(RESOLUTION_OPTIONS)}")

    return req.prompt.strip(), int(req.amount), req.resolution
