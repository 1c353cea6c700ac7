"""Gradio UI for Promptdeck."""

import logging

import gradio as gr

from promptdeck.core.config import config

from .handlers import render_conversation, submit_code_prompt, submit_image_prompt
from .models import (
    AMOUNT_OPTIONS,
    DEFAULT_AMOUNT,
    DEFAULT_RESOLUTION,
    EMPTY_CONVERSATION_LABEL,
    EMPTY_GALLERY_LABEL,
    RESOLUTION_OPTIONS,
    ConversationState,
    GalleryState,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> gr.Blocks:
    """Create the Gradio UI.

    Returns:
        Gradio Blocks app
    """
    app = gr.Blocks(title="Promptdeck")

    with app:
        # Session state - one instance per user
        conversation_state = gr.State(ConversationState())
        gallery_state = gr.State(GalleryState())

        gr.Markdown(
            """
            # Promptdeck
            ### Code and image generation
            """
        )

        with gr.Tabs():
            with gr.Tab("Code Generation", id="code_tab"):
                chatbot, status = create_code_tab(conversation_state)

            with gr.Tab("Image Generation", id="image_tab"):
                create_image_tab(gallery_state)

        app.load(
            fn=render_conversation,
            inputs=[conversation_state],
            outputs=[chatbot, status, conversation_state],
        )

    return app


def create_code_tab(conversation_state: gr.State) -> tuple[gr.Chatbot, gr.Markdown]:
    """Create the code generation tab.

    Args:
        conversation_state: Session conversation state component

    Returns:
        Tuple of (chatbot, status_markdown) components
    """
    gr.Markdown("*Generate code using descriptive text.*")

    with gr.Row():
        prompt_input = gr.Textbox(
            label="Prompt",
            placeholder="Describe your code request here.",
            scale=5,
        )
        generate_btn = gr.Button("Generate", variant="primary", scale=1)

    status = gr.Markdown(value=f"*{EMPTY_CONVERSATION_LABEL}*")
    chatbot = gr.Chatbot(label="Conversation", type="messages", height=600)

    submit_event = {
        "fn": submit_code_prompt,
        "inputs": [prompt_input, conversation_state],
        "outputs": [chatbot, prompt_input, status, conversation_state],
        # Submissions run side by side; the controller tracks each one
        "concurrency_limit": None,
        "trigger_mode": "multiple",
    }
    generate_btn.click(**submit_event)
    prompt_input.submit(**submit_event)

    return chatbot, status


def create_image_tab(gallery_state: gr.State) -> None:
    """Create the image generation tab.

    Args:
        gallery_state: Session gallery state component
    """
    gr.Markdown("*Turn your prompt into an image.*")

    with gr.Row():
        prompt_input = gr.Textbox(
            label="Prompt",
            placeholder="A picture of a horse in Swiss alps",
            scale=3,
        )
        amount_dropdown = gr.Dropdown(
            label="Amount",
            choices=list(AMOUNT_OPTIONS.items()),
            value=DEFAULT_AMOUNT,
            scale=1,
        )
        resolution_dropdown = gr.Dropdown(
            label="Resolution",
            choices=list(RESOLUTION_OPTIONS.items()),
            value=DEFAULT_RESOLUTION,
            scale=1,
        )
        generate_btn = gr.Button("Generate", variant="primary", scale=1)

    status = gr.Markdown(value=f"*{EMPTY_GALLERY_LABEL}*")
    gallery = gr.Gallery(
        label="Images",
        columns=4,
        object_fit="cover",
        height=600,
    )

    generate_btn.click(
        fn=submit_image_prompt,
        inputs=[prompt_input, amount_dropdown, resolution_dropdown, gallery_state],
        outputs=[
            gallery,
            prompt_input,
            amount_dropdown,
            resolution_dropdown,
            status,
            gallery_state,
        ],
        concurrency_limit=None,
        trigger_mode="multiple",
    )


def main() -> None:
    """Launch the Gradio UI.

    Reads bind address and port from :data:`~promptdeck.core.config.config`.
    Registered as the ``promptdeck-ui`` console script.
    """
    logger.info(f"Starting Promptdeck UI against {config.api_base_url}")
    app = create_ui()
    app.queue().launch(
        server_name=config.ui_server_name,
        server_port=config.ui_server_port,
    )


if __name__ == "__main__":
    main()
