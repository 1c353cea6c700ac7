"""Data models for Promptdeck UI state and render projections."""

import logging
import uuid
from collections.abc import Iterator
from dataclasses import dataclass, field

from promptdeck.api.models import AMOUNT_OPTIONS as AMOUNT_VALUES
from promptdeck.api.models import RESOLUTION_OPTIONS as RESOLUTION_VALUES

logger = logging.getLogger(__name__)

CLIENT_ROLES = ("user", "assistant")


def new_turn_id() -> str:
    """Return a fresh opaque turn identifier."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Turn:
    """One message in a conversation.

    Turns are immutable once created.  ``system`` turns exist only at the
    proxy boundary and are never stored on the client.
    """

    id: str
    role: str
    content: str

    def to_payload(self) -> dict[str, str]:
        """Serialize the turn for the relay request body."""
        return {"id": self.id, "role": self.role, "content": self.content}


class Transcript:
    """Append-only, oldest-first sequence of turns for one session.

    There is deliberately no way to edit or remove a turn.
    """

    def __init__(self) -> None:
        self._turns: list[Turn] = []
        self._ids: set[str] = set()

    def append(self, turn: Turn) -> int:
        """Append a turn and return its index.

        Raises:
            ValueError: If the role is not a client role or the id was
                already used in this transcript.
        """
        if turn.role not in CLIENT_ROLES:
            raise ValueError(f"Transcript cannot hold '{turn.role}' turns")
        if turn.id in self._ids:
            raise ValueError(f"Turn id already used: {turn.id}")
        self._turns.append(turn)
        self._ids.add(turn.id)
        return len(self._turns) - 1

    def to_payload(self) -> list[dict[str, str]]:
        """Return every turn, in order, as relay payload dicts."""
        return [turn.to_payload() for turn in self._turns]

    def __len__(self) -> int:
        return len(self._turns)

    def __iter__(self) -> Iterator[Turn]:
        return iter(list(self._turns))

    def __getitem__(self, index: int) -> Turn:
        return self._turns[index]

    def __repr__(self) -> str:
        return f"Transcript(turns={len(self._turns)})"


@dataclass
class ConversationState:
    """Session state for the code generation conversation.

    Attributes
    ----------
    transcript : Transcript
        All turns of the session, oldest first
    pending : dict[str, int]
        In-flight requests: request id -> index of the user turn it carries.
        Insertion order is submission order.
    error : str | None
        Message from the last failed submission or validation
    prompt : str
        Current content of the prompt input
    """

    transcript: Transcript = field(default_factory=Transcript)
    pending: dict[str, int] = field(default_factory=dict)
    error: str | None = None
    prompt: str = ""

    @property
    def is_loading(self) -> bool:
        return bool(self.pending)

    @property
    def loading_index(self) -> int | None:
        """Index of the turn showing the single visible loading indicator.

        The most recently started request that has not resolved yet.
        """
        if not self.pending:
            return None
        return next(reversed(self.pending.values()))


@dataclass
class GalleryState:
    """Session state for the image generation page.

    Attributes
    ----------
    images : list[str]
        URLs from the last successful generation (replaced on every success)
    error : str | None
        Message from the last failed submission or validation
    pending : int
        Number of generation requests still outstanding
    prompt, amount, resolution : str
        Current form values
    """

    images: list[str] = field(default_factory=list)
    error: str | None = None
    pending: int = 0
    prompt: str = ""
    amount: str = "1"
    resolution: str = "512x512"

    @property
    def loading(self) -> bool:
        return self.pending > 0


@dataclass(frozen=True)
class TurnView:
    """Render projection of one turn."""

    id: str
    role: str
    content: str
    is_loading: bool = False


@dataclass(frozen=True)
class TranscriptView:
    """Render projection of a conversation.

    ``turns`` are oldest first; the UI decides display order.
    """

    turns: tuple[TurnView, ...]
    error: str | None
    is_loading: bool

    @property
    def is_empty(self) -> bool:
        return not self.turns and not self.is_loading and not self.error


@dataclass(frozen=True)
class GalleryView:
    """Render projection of the image gallery."""

    images: tuple[str, ...]
    error: str | None
    is_loading: bool

    @property
    def is_empty(self) -> bool:
        return not self.images and not self.is_loading and not self.error


# Constants for UI
AMOUNT_OPTIONS = {
    (f"{value} Photo" if value == "1" else f"{value} Photos"): value for value in AMOUNT_VALUES
}
RESOLUTION_OPTIONS = {value: value for value in RESOLUTION_VALUES}

DEFAULT_AMOUNT = "1"
DEFAULT_RESOLUTION = "512x512"

EMPTY_CONVERSATION_LABEL = "No conversation started."
EMPTY_GALLERY_LABEL = "No images generated."
LOADING_LABEL = "Generating..."
