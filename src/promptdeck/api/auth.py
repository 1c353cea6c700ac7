"""Caller identity seam.

Promptdeck does not authenticate anyone itself.  The server is expected to
sit behind an identity provider (or a gateway talking to one) that verifies
the user and forwards the verified id in a request header.  The proxy only
asks "is there a caller?" through the :func:`get_caller_id` dependency,
which tests and alternative deployments replace via
``app.dependency_overrides``.
"""

from __future__ import annotations

from fastapi import Depends, Request

from promptdeck.core.config import PromptdeckConfig, config


def get_settings() -> PromptdeckConfig:
    """Return the process-wide configuration."""
    return config


def get_caller_id(
    request: Request,
    settings: PromptdeckConfig = Depends(get_settings),
) -> str | None:
    """Return the verified caller id, or ``None`` when there is none.

    Blank header values count as absent.
    """
    caller_id = request.headers.get(settings.identity_header, "").strip()
    return caller_id or None
