"""Unit tests for UI data models."""

import copy

import pytest

from promptdeck.ui.models import (
    AMOUNT_OPTIONS,
    RESOLUTION_OPTIONS,
    ConversationState,
    GalleryState,
    GalleryView,
    Transcript,
    TranscriptView,
    Turn,
    new_turn_id,
)


class TestTurn:
    """Tests for Turn dataclass."""

    def test_to_payload(self):
        turn = Turn(id="t1", role="user", content="hi")
        assert turn.to_payload() == {"id": "t1", "role": "user", "content": "hi"}

    def test_turn_is_immutable(self):
        turn = Turn(id="t1", role="user", content="hi")
        with pytest.raises(AttributeError):
            turn.content = "edited"

    def test_new_turn_ids_are_unique(self):
        assert len({new_turn_id() for _ in range(100)}) == 100


class TestTranscript:
    """Tests for the append-only Transcript."""

    def test_starts_empty(self):
        transcript = Transcript()
        assert len(transcript) == 0
        assert transcript.to_payload() == []

    def test_append_returns_index(self):
        transcript = Transcript()
        assert transcript.append(Turn(id="a", role="user", content="1")) == 0
        assert transcript.append(Turn(id="b", role="assistant", content="2")) == 1

    def test_order_is_insertion_order(self):
        transcript = Transcript()
        transcript.append(Turn(id="a", role="user", content="1"))
        transcript.append(Turn(id="b", role="assistant", content="2"))
        assert [t.id for t in transcript] == ["a", "b"]
        assert transcript[1].content == "2"

    def test_system_turn_rejected(self):
        transcript = Transcript()
        with pytest.raises(ValueError, match="system"):
            transcript.append(Turn(id="s", role="system", content="rules"))
        assert len(transcript) == 0

    def test_duplicate_id_rejected(self):
        transcript = Transcript()
        transcript.append(Turn(id="a", role="user", content="1"))
        with pytest.raises(ValueError, match="already used"):
            transcript.append(Turn(id="a", role="assistant", content="2"))

    def test_no_removal_api(self):
        transcript = Transcript()
        assert not hasattr(transcript, "remove")
        assert not hasattr(transcript, "pop")

    def test_iteration_is_a_snapshot(self):
        transcript = Transcript()
        transcript.append(Turn(id="a", role="user", content="1"))
        iterator = iter(transcript)
        transcript.append(Turn(id="b", role="assistant", content="2"))
        assert [t.id for t in iterator] == ["a"]

    def test_deepcopy_keeps_turns(self):
        transcript = Transcript()
        transcript.append(Turn(id="a", role="user", content="1"))
        copied = copy.deepcopy(transcript)
        copied.append(Turn(id="b", role="assistant", content="2"))
        assert len(transcript) == 1
        assert len(copied) == 2


class TestConversationState:
    """Tests for ConversationState in-flight tracking."""

    def test_not_loading_when_nothing_pending(self, conversation_state):
        assert conversation_state.is_loading is False
        assert conversation_state.loading_index is None

    def test_loading_index_is_latest_pending(self, conversation_state):
        conversation_state.pending["r1"] = 0
        conversation_state.pending["r2"] = 2
        assert conversation_state.loading_index == 2

    def test_loading_index_falls_back_when_latest_resolves(self, conversation_state):
        conversation_state.pending["r1"] = 0
        conversation_state.pending["r2"] = 2
        del conversation_state.pending["r2"]
        assert conversation_state.loading_index == 0


class TestViews:
    """Tests for render views."""

    def test_transcript_view_empty(self):
        assert TranscriptView(turns=(), error=None, is_loading=False).is_empty

    def test_transcript_view_not_empty_with_error(self):
        assert not TranscriptView(turns=(), error="x", is_loading=False).is_empty

    def test_gallery_view_not_empty_while_loading(self):
        assert not GalleryView(images=(), error=None, is_loading=True).is_empty


class TestConstants:
    def test_amount_options_labels(self):
        assert AMOUNT_OPTIONS["1 Photo"] == "1"
        assert AMOUNT_OPTIONS["5 Photos"] == "5"

    def test_resolution_options(self):
        assert list(RESOLUTION_OPTIONS.values()) == ["256x256", "512x512", "1024x1024"]

    def test_gallery_state_defaults(self):
        state = GalleryState()
        assert state.amount == "1"
        assert state.resolution == "512x512"
        assert state.images == []
