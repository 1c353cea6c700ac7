"""Validation utilities for Promptdeck UI inputs."""

import logging

from .models import AMOUNT_OPTIONS, RESOLUTION_OPTIONS

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """User-friendly validation error.

    This exception is raised when user input fails validation.
    The message is intended to be displayed directly to the user.
    """

    pass


def validate_prompt(prompt: str | None) -> str:
    """Validate a prompt and return it unchanged.

    Args:
        prompt: Raw text from the prompt input

    Returns:
        The prompt as entered

    Raises:
        ValidationError: If the prompt is empty or whitespace only
    """
    if not prompt or not prompt.strip():
        raise ValidationError("Prompt is required")
    return prompt


def validate_image_form(prompt: str | None, amount: str | None, resolution: str | None) -> None:
    """Validate the image generation form.

    Args:
        prompt: Image description
        amount: Selected amount value ("1"-"5")
        resolution: Selected resolution value (e.g. "512x512")

    Raises:
        ValidationError: If any field is missing or not one of the offered options
    """
    validate_prompt(prompt)

    if not amount:
        raise ValidationError("Amount is required")
    if amount not in AMOUNT_OPTIONS.values():
        raise ValidationError(f"Unsupported amount: {amount}")

    if not resolution:
        raise ValidationError("Resolution is required")
    if resolution not in RESOLUTION_OPTIONS.values():
        raise ValidationError(f"Unsupported resolution: {resolution}")
