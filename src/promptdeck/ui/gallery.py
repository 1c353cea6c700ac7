"""Client-side controller for the image generation page."""

from __future__ import annotations

import logging

from .client import IMAGE_FAILED_MESSAGE, RelayClient, RelayRequestError
from .models import DEFAULT_AMOUNT, DEFAULT_RESOLUTION, GalleryState, GalleryView
from .validation import ValidationError, validate_image_form

logger = logging.getLogger(__name__)


class GalleryController:
    """Drives image generation for one session.

    Unlike the conversation, the gallery is not a log: every successful
    generation replaces the images shown.  Overlapping submissions each
    count themselves in ``state.pending``, so loading stays on until the last
    one resolves, and the last one to succeed decides the images shown.
    """

    def __init__(self, state: GalleryState, client: RelayClient) -> None:
        self.state = state
        self.client = client

    async def submit(self, prompt: str, amount: str, resolution: str) -> bool:
        """Generate images for the form values.

        Returns:
            True if the gallery was replaced with new images, False otherwise
        """
        try:
            validate_image_form(prompt, amount, resolution)
        except ValidationError as e:
            self.state.error = str(e)
            return False

        self.state.error = None
        self.state.pending += 1

        try:
            urls = await self.client.generate_images(prompt, amount, resolution)
            self.state.images = urls
            # Reset the form to its defaults
            self.state.prompt = ""
            self.state.amount = DEFAULT_AMOUNT
            self.state.resolution = DEFAULT_RESOLUTION
            logger.info(f"Gallery updated with {len(urls)} image(s)")
            return True

        except RelayRequestError as e:
            logger.error(f"Error generating images: {e.message}")
            self.state.error = IMAGE_FAILED_MESSAGE
            return False

        except Exception as e:
            logger.error(f"Unexpected error generating images: {e}", exc_info=True)
            self.state.error = IMAGE_FAILED_MESSAGE
            return False

        finally:
            self.state.pending -= 1

    def render(self) -> GalleryView:
        return render_gallery(self.state)


def render_gallery(state: GalleryState) -> GalleryView:
    """Project gallery state into a render-ready view without side effects."""
    return GalleryView(
        images=tuple(state.images),
        error=state.error,
        is_loading=state.loading,
    )
