"""State management utilities for the Promptdeck UI.

This module creates per-session state and the shared relay client.  Session
state holds only plain data so Gradio can copy it per user; controllers are
built around it for the duration of one event.
"""

import logging
from functools import lru_cache

from promptdeck.core.config import config

from .client import RelayClient
from .gallery import GalleryController
from .models import ConversationState, GalleryState
from .transcript import TranscriptController

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_relay_client() -> RelayClient:
    """Return the relay client configured from the global config."""
    logger.info(f"Creating RelayClient for {config.api_base_url}")
    if not config.ui_user_id:
        logger.warning(
            f"PROMPTDECK_UI_USER_ID is not set; requests carry no {config.identity_header} "
            "header and will be rejected unless a gateway adds it"
        )
    return RelayClient.from_config(config)


def initialize_conversation_state(state: ConversationState | None = None) -> ConversationState:
    """Return ``state``, or a fresh empty conversation when it is ``None``."""
    if state is None:
        logger.info("Creating new ConversationState")
        state = ConversationState()
    return state


def initialize_gallery_state(state: GalleryState | None = None) -> GalleryState:
    """Return ``state``, or a fresh empty gallery when it is ``None``."""
    if state is None:
        logger.info("Creating new GalleryState")
        state = GalleryState()
    return state


def transcript_controller(
    state: ConversationState | None, client: RelayClient | None = None
) -> TranscriptController:
    """Build a controller around the session's conversation state."""
    return TranscriptController(
        initialize_conversation_state(state), client or get_relay_client()
    )


def gallery_controller(
    state: GalleryState | None, client: RelayClient | None = None
) -> GalleryController:
    """Build a controller around the session's gallery state."""
    return GalleryController(initialize_gallery_state(state), client or get_relay_client())
