"""Client-side controller for the code generation conversation.

The controller owns the submit cycle for one session's
:class:`~promptdeck.ui.models.ConversationState`:

1. validate the prompt (no request is sent for an empty prompt)
2. append the user turn and register the request as in flight
3. send the whole transcript to the relay
4. append the assistant turn on success, or record an error on failure
5. resolve the request's in-flight entry in every case

Submissions are independent.  A second ``submit`` started before the first
finishes neither waits for nor cancels it; each one only removes its own
in-flight entry, so the loading indicator moves to whichever request is
still outstanding.
"""

from __future__ import annotations

import logging

from .client import RelayClient, RelayRequestError
from .models import (
    ConversationState,
    TranscriptView,
    Turn,
    TurnView,
    new_turn_id,
)
from .validation import ValidationError, validate_prompt

logger = logging.getLogger(__name__)

NO_RESPONSE_CONTENT = "No response from bot."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class TranscriptController:
    """Drives the submit cycle for one conversation.

    Args:
        state: Session state to mutate
        client: Relay client used for the network call
    """

    def __init__(self, state: ConversationState, client: RelayClient) -> None:
        self.state = state
        self.client = client

    async def submit(self, prompt_text: str) -> bool:
        """Submit one user prompt.

        Args:
            prompt_text: Text from the prompt input

        Returns:
            True if an assistant turn was appended, False otherwise
        """
        try:
            validate_prompt(prompt_text)
        except ValidationError as e:
            self.state.error = str(e)
            return False

        self.state.error = None

        request_id = new_turn_id()
        user_turn = Turn(id=new_turn_id(), role="user", content=prompt_text)
        index = self.state.transcript.append(user_turn)
        self.state.pending[request_id] = index

        try:
            data = await self.client.send_conversation(self.state.transcript.to_payload())

            assistant_turn = Turn(
                id=new_turn_id(),
                role="assistant",
                content=data.get("content") or NO_RESPONSE_CONTENT,
            )
            self.state.transcript.append(assistant_turn)
            self.state.prompt = ""
            return True

        except RelayRequestError as e:
            logger.error(f"Error submitting message: {e.message}")
            self.state.error = e.message
            return False

        except Exception as e:
            logger.error(f"Unexpected error submitting message: {e}", exc_info=True)
            self.state.error = UNEXPECTED_ERROR_MESSAGE
            return False

        finally:
            self.state.pending.pop(request_id, None)

    def render(self) -> TranscriptView:
        return render_transcript(self.state)


def render_transcript(state: ConversationState) -> TranscriptView:
    """Project conversation state into a render-ready view without side effects."""
    loading_index = state.loading_index
    turns = tuple(
        TurnView(
            id=turn.id,
            role=turn.role,
            content=turn.content,
            is_loading=index == loading_index,
        )
        for index, turn in enumerate(state.transcript)
    )
    return TranscriptView(
        turns=turns,
        error=state.error,
        is_loading=state.is_loading,
    )
