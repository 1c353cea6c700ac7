"""Promptdeck - code and image generation relay over a hosted LLM API."""

__version__ = "0.1.0"

from promptdeck.core.config import PromptdeckConfig, config  # noqa: E402

__all__ = [
    "PromptdeckConfig",
    "config",
]
