"""Promptdeck — FastAPI Application.

This module is the single entry point for the relay server.  It defines the
FastAPI ``app`` instance, all routes, and the ``main()`` CLI function that
launches the uvicorn server.

Architecture
------------
The server is a stateless relay:

- **Identity** comes from the identity provider in front of the server via
  the :func:`~promptdeck.api.auth.get_caller_id` dependency.
- **Completions and images** are produced by the external provider through
  :class:`~promptdeck.core.provider.CompletionProvider`.
- **Nothing is persisted**: every request carries its full context (the
  transcript, or the image form) and gets a self-contained answer.
- **Errors** are raised as :class:`~promptdeck.api.errors.RelayError`
  subclasses and rendered as plain-text bodies by a single handler.

Endpoints
---------
========  ===============  ==============================================
Method    Path             Purpose
========  ===============  ==============================================
GET       ``/``            Serve the landing page
GET       ``/api/config``  Models and image form options
POST      ``/api/code``    Relay a transcript, return one assistant turn
POST      ``/api/image``   Generate images, return their URLs
========  ===============  ==============================================

Usage
-----
CLI (installed entry point)::

    promptdeck

Direct invocation::

    python -m promptdeck.api.main
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import openai
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from promptdeck import __version__
from promptdeck.api.auth import get_caller_id, get_settings
from promptdeck.api.errors import (
    BadRequest,
    ConfigurationError,
    InternalError,
    RelayError,
    Unauthorized,
    UpstreamEmpty,
    UpstreamOrNetworkFailure,
    relay_error_handler,
)
from promptdeck.api.models import AMOUNT_OPTIONS, RESOLUTION_OPTIONS, AssistantTurn, ImageResult
from promptdeck.api.relay import (
    MESSAGES_REQUIRED,
    compose_upstream_messages,
    parse_conversation_request,
    parse_image_request,
)
from promptdeck.core.config import PromptdeckConfig, config
from promptdeck.core.provider import CompletionProvider

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Application lifecycle: provider client setup and teardown.
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Create the provider wrapper on startup and close it on shutdown.

    The SDK client inside the wrapper is created lazily, so startup succeeds
    even without a configured credential.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to the application for the duration of its lifetime.
    """
    app.state.provider = CompletionProvider(config)
    logger.info("CompletionProvider initialised (client created on first use).")

    yield

    await app.state.provider.close()
    logger.info("CompletionProvider closed on shutdown.")


# ---------------------------------------------------------------------------
# FastAPI application instance.
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Promptdeck",
    description="Code and image generation relay over a hosted LLM API.",
    version=__version__,
    lifespan=lifespan,
)

# The UI shell may be served from a different port during development.  In
# production, restrict ``allow_origins`` to the actual deployment domain.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RelayError, relay_error_handler)


# ---------------------------------------------------------------------------
# Dependencies and request helpers.
# ---------------------------------------------------------------------------


def get_provider(request: Request) -> CompletionProvider:
    """Return the provider created by the lifespan handler.

    Falls back to creating one when the app runs without its lifespan
    (e.g. a ``TestClient`` used outside a ``with`` block).
    """
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        provider = CompletionProvider(config)
        request.app.state.provider = provider
    return provider


def _check_preconditions(caller_id: str | None, settings: PromptdeckConfig) -> None:
    """Run the identity and configuration checks, in that order."""
    if caller_id is None:
        raise Unauthorized()
    if not settings.has_provider_credential:
        raise ConfigurationError()


async def _read_json(request: Request, invalid_message: str) -> Any:
    """Decode the request body, mapping undecodable bodies to ``BadRequest``."""
    try:
        return await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise BadRequest(invalid_message) from exc


# ---------------------------------------------------------------------------
# Routes.
# ---------------------------------------------------------------------------


@app.get("/", response_class=HTMLResponse)
async def index(settings: PromptdeckConfig = Depends(get_settings)) -> HTMLResponse:
    """Serve the landing page.

    Raises:
        HTTPException: 404 if ``index.html`` is not found.
    """
    index_path = settings.templates_dir / "index.html"
    if index_path.exists():
        return HTMLResponse(content=index_path.read_text(encoding="utf-8"))
    raise HTTPException(status_code=404, detail="index.html not found")


@app.get("/api/config")
async def get_config(settings: PromptdeckConfig = Depends(get_settings)) -> dict:
    """Return the models and image form options for the frontend.

    The credential itself is never exposed; only whether one is configured.
    """
    return {
        "version": __version__,
        "code_model": settings.code_model,
        "image_model": settings.image_model,
        "provider_configured": settings.has_provider_credential,
        "amount_options": list(AMOUNT_OPTIONS),
        "resolution_options": list(RESOLUTION_OPTIONS),
    }


@app.post("/api/code", response_model=AssistantTurn)
async def code_conversation(
    request: Request,
    caller_id: str | None = Depends(get_caller_id),
    settings: PromptdeckConfig = Depends(get_settings),
    provider: CompletionProvider = Depends(get_provider),
) -> AssistantTurn:
    """Relay a transcript to the provider and return the next assistant turn.

    This endpoint:

    1. Rejects callers without a verified identity (401).
    2. Rejects requests while no provider credential is configured (500).
    3. Validates the ``messages`` list (400).
    4. Prepends the fixed system instruction.
    5. Requests exactly one completion choice.
    6. Returns that choice as ``{"role": "assistant", "content": ...}``.

    Raises:
        RelayError: One of the taxonomy errors, rendered by the app's
            exception handler.
    """
    try:
        _check_preconditions(caller_id, settings)

        body = await _read_json(request, MESSAGES_REQUIRED)
        conversation = parse_conversation_request(body)

        upstream = compose_upstream_messages(settings.system_instruction, conversation.messages)
        choices = await provider.complete(upstream)

        if not choices:
            raise UpstreamEmpty()

        logger.info(f"Relayed {len(conversation.messages)} turn(s) for caller {caller_id}")
        return AssistantTurn(content=choices[0].get("content") or "")

    except RelayError:
        raise
    except openai.APIError as exc:
        logger.error(f"[CONVERSATION_ERROR] Provider request failed: {exc}")
        raise UpstreamOrNetworkFailure() from exc
    except Exception as exc:
        logger.error(f"[CONVERSATION_ERROR] {exc}", exc_info=True)
        raise InternalError.from_exception(exc) from exc


@app.post("/api/image", response_model=list[ImageResult])
async def generate_images(
    request: Request,
    caller_id: str | None = Depends(get_caller_id),
    settings: PromptdeckConfig = Depends(get_settings),
    provider: CompletionProvider = Depends(get_provider),
) -> list[ImageResult]:
    """Generate images for a prompt and return their URLs in provider order.

    Checks run in the same order as ``POST /api/code``: identity,
    configuration, then the form values.

    Raises:
        RelayError: One of the taxonomy errors, rendered by the app's
            exception handler.
    """
    try:
        _check_preconditions(caller_id, settings)

        body = await _read_json(request, "Request body must be a JSON object.")
        prompt, amount, resolution = parse_image_request(body)

        urls = await provider.generate_images(prompt, amount, resolution)
        if not urls:
            raise UpstreamEmpty("No images returned from OpenAI.")

        logger.info(f"Generated {len(urls)} image(s) at {resolution} for caller {caller_id}")
        return [ImageResult(url=url) for url in urls]

    except RelayError:
        raise
    except openai.APIError as exc:
        logger.error(f"[IMAGE_ERROR] Provider request failed: {exc}")
        raise UpstreamOrNetworkFailure("Failed to reach the image provider.") from exc
    except Exception as exc:
        logger.error(f"[IMAGE_ERROR] {exc}", exc_info=True)
        raise InternalError.from_exception(exc) from exc


# ---------------------------------------------------------------------------
# CLI entry point.
# ---------------------------------------------------------------------------


def main() -> None:
    """Launch the uvicorn ASGI server.

    Reads host and port from :data:`~promptdeck.core.config.config` (which
    loads from ``PROMPTDECK_SERVER_HOST`` and ``PROMPTDECK_SERVER_PORT``
    environment variables).  Defaults to ``0.0.0.0:3000``.

    This function is registered as the ``promptdeck`` console script in
    ``pyproject.toml``.
    """
    import uvicorn

    uvicorn.run(
        "promptdeck.api.main:app",
        host=config.server_host,
        port=config.server_port,
        reload=False,
    )


if __name__ == "__main__":
    main()
