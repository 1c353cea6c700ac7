"""Image generation handlers."""

import asyncio
import logging
from collections.abc import AsyncIterator

import gradio as gr

from ..client import RelayClient
from ..models import EMPTY_GALLERY_LABEL, LOADING_LABEL, GalleryState, GalleryView
from ..state import gallery_controller

logger = logging.getLogger(__name__)

ImagePromptOutputs = tuple[list[str], str, str, str, dict, GalleryState]


def format_gallery_status(view: GalleryView) -> str:
    """Build the status markdown shown above the gallery.

    Args:
        view: Rendered gallery

    Returns:
        Error banner, loading label, empty-state label, or an empty string
    """
    if view.error:
        return f"❌ **Error:** {view.error}"
    if view.is_loading:
        return f"*{LOADING_LABEL}*"
    if view.is_empty:
        return f"*{EMPTY_GALLERY_LABEL}*"
    return ""


def _outputs(view: GalleryView, state: GalleryState) -> ImagePromptOutputs:
    status = format_gallery_status(view)
    return (
        list(view.images),
        state.prompt,
        state.amount,
        state.resolution,
        gr.update(value=status, visible=bool(status)),
        state,
    )


async def submit_image_prompt(
    prompt: str,
    amount: str,
    resolution: str,
    state: GalleryState,
    client: RelayClient | None = None,
) -> AsyncIterator[ImagePromptOutputs]:
    """Submit the image generation form.

    Yields a loading render while the request is outstanding, then the
    final render.

    Args:
        prompt: Image description
        amount: Selected amount value
        resolution: Selected resolution value
        state: Session gallery state
        client: Relay client override (defaults to the configured client)

    Yields:
        Tuple of (gallery_urls, prompt_value, amount_value, resolution_value,
        status_update, updated_state)
    """
    controller = gallery_controller(state, client)
    controller.state.prompt = prompt or ""
    controller.state.amount = amount
    controller.state.resolution = resolution

    task = asyncio.create_task(controller.submit(prompt or "", amount, resolution))
    await asyncio.sleep(0)

    if not task.done():
        yield _outputs(controller.render(), controller.state)

    await task

    yield _outputs(controller.render(), controller.state)
