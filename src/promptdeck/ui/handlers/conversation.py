"""Code generation conversation handlers."""

import asyncio
import logging
from collections.abc import AsyncIterator

import gradio as gr

from ..client import RelayClient
from ..models import (
    EMPTY_CONVERSATION_LABEL,
    LOADING_LABEL,
    ConversationState,
    TranscriptView,
)
from ..state import initialize_conversation_state, transcript_controller
from ..transcript import render_transcript

logger = logging.getLogger(__name__)

CodePromptOutputs = tuple[list[dict[str, str]], str, dict, ConversationState]


def to_chatbot_messages(view: TranscriptView) -> list[dict[str, str]]:
    """Convert a transcript view into Gradio ``messages`` format.

    The turn carrying the loading indicator is followed by a placeholder
    assistant bubble.

    Args:
        view: Rendered transcript, oldest first

    Returns:
        List of ``{"role", "content"}`` dicts for ``gr.Chatbot``
    """
    messages = []
    for turn in view.turns:
        messages.append({"role": turn.role, "content": turn.content})
        if turn.is_loading:
            messages.append({"role": "assistant", "content": LOADING_LABEL})
    return messages


def format_status(view: TranscriptView) -> str:
    """Build the status markdown shown above the chat.

    Args:
        view: Rendered transcript

    Returns:
        Error banner, empty-state label, or an empty string
    """
    if view.error:
        return f"❌ **Error:** {view.error}"
    if view.is_empty:
        return f"*{EMPTY_CONVERSATION_LABEL}*"
    return ""


def _status_update(view: TranscriptView) -> dict:
    status = format_status(view)
    return gr.update(value=status, visible=bool(status))


async def submit_code_prompt(
    prompt: str,
    state: ConversationState,
    client: RelayClient | None = None,
) -> AsyncIterator[CodePromptOutputs]:
    """Submit a prompt from the code generation form.

    Yields a render as soon as the user turn is appended (showing the
    loading placeholder), then a final render once the request resolves.
    Other submissions from the same session may be pending meanwhile; every
    render reflects all of them.

    The prompt input keeps its text when the submission fails so the user
    can resubmit it.

    Args:
        prompt: Text from the prompt input
        state: Session conversation state
        client: Relay client override (defaults to the configured client)

    Yields:
        Tuple of (chatbot_messages, prompt_value, status_update, updated_state)
    """
    controller = transcript_controller(state, client)
    controller.state.prompt = prompt or ""

    task = asyncio.create_task(controller.submit(prompt or ""))
    # Let submit append the user turn and register the request
    await asyncio.sleep(0)

    if not task.done():
        view = controller.render()
        yield (
            to_chatbot_messages(view),
            controller.state.prompt,
            _status_update(view),
            controller.state,
        )

    await task

    view = controller.render()
    yield (
        to_chatbot_messages(view),
        controller.state.prompt,
        _status_update(view),
        controller.state,
    )


def render_conversation(
    state: ConversationState,
) -> tuple[list[dict[str, str]], dict, ConversationState]:
    """Render the current conversation without submitting anything.

    Used on page load so a returning session sees its transcript.

    Returns:
        Tuple of (chatbot_messages, status_update, state)
    """
    state = initialize_conversation_state(state)
    view = render_transcript(state)
    return to_chatbot_messages(view), _status_update(view), state
