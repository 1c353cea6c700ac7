"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events:
- conversation: Code generation chat submission and rendering
- image: Image generation form submission
"""

from .conversation import (
    format_status,
    render_conversation,
    submit_code_prompt,
    to_chatbot_messages,
)
from .image import (
    format_gallery_status,
    submit_image_prompt,
)

__all__ = [
    # Conversation handlers
    "format_status",
    "render_conversation",
    "submit_code_prompt",
    "to_chatbot_messages",
    # Image handlers
    "format_gallery_status",
    "submit_image_prompt",
]
