"""Shared pytest fixtures for Promptdeck tests."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient

from promptdeck.api.auth import get_settings
from promptdeck.api.main import app, get_provider
from promptdeck.core.config import PACKAGE_DIR, PromptdeckConfig
from promptdeck.ui.client import RelayClient
from promptdeck.ui.models import ConversationState, GalleryState

TEST_INSTRUCTION = "You are a code generator. Answer in markdown code snippets."
AUTH_HEADERS = {"X-User-Id": "user_123"}
BASE_URL = "http://relay.test"


class FakeProvider:
    """Stand-in for CompletionProvider that records every upstream call."""

    def __init__(self) -> None:
        self.completion_calls: list[list[dict[str, str]]] = []
        self.image_calls: list[tuple[str, int, str]] = []
        self.choices: list[dict] = [{"role": "assistant", "content": "```python\nprint(1)\n```"}]
        self.image_urls: list[str] = ["https://images.test/1.png"]
        self.error: Exception | None = None

    async def complete(self, messages):
        self.completion_calls.append(messages)
        if self.error is not None:
            raise self.error
        return self.choices

    async def generate_images(self, prompt, amount, resolution):
        self.image_calls.append((prompt, amount, resolution))
        if self.error is not None:
            raise self.error
        return self.image_urls

    async def close(self):
        pass


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    Yields:
        Path to temporary directory

    Cleanup:
        Directory is removed after test completes
    """
    temp_path = Path(tempfile.mkdtemp())
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def test_config() -> PromptdeckConfig:
    """Create a test configuration that ignores the environment's .env file.

    Returns:
        PromptdeckConfig instance for testing
    """
    return PromptdeckConfig(
        openai_api_key="sk-test",
        code_model="gpt-4o-mini",
        image_model="dall-e-2",
        system_instruction=TEST_INSTRUCTION,
        identity_header="X-User-Id",
        templates_dir=PACKAGE_DIR / "templates",
        api_base_url=BASE_URL,
        _env_file=None,
    )


@pytest.fixture
def unconfigured_config(test_config: PromptdeckConfig) -> PromptdeckConfig:
    """Test configuration without a provider credential."""
    return test_config.model_copy(update={"openai_api_key": None})


@pytest.fixture
def fake_provider() -> FakeProvider:
    """Provider double with one canned choice and one canned image."""
    return FakeProvider()


@pytest.fixture
def test_client(
    test_config: PromptdeckConfig, fake_provider: FakeProvider
) -> Generator[TestClient, None, None]:
    """TestClient with the settings and provider dependencies overridden.

    The real identity dependency stays in place, so requests authenticate
    by sending :data:`AUTH_HEADERS`.
    """
    app.dependency_overrides[get_settings] = lambda: test_config
    app.dependency_overrides[get_provider] = lambda: fake_provider
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def conversation_state() -> ConversationState:
    """Create an empty conversation state.

    Returns:
        ConversationState instance
    """
    return ConversationState()


@pytest.fixture
def gallery_state() -> GalleryState:
    """Create an empty gallery state.

    Returns:
        GalleryState instance
    """
    return GalleryState()


class RecordingRelay:
    """httpx MockTransport handler that records requests and replays responses."""

    def __init__(self, *responses: httpx.Response | Exception) -> None:
        self.responses = list(responses)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_relay_client():
    """Factory for a RelayClient backed by a RecordingRelay.

    Returns:
        Callable taking httpx responses and returning ``(client, relay)``
    """

    def _make(*responses: httpx.Response | Exception, user_id: str | None = "user_123"):
        relay = RecordingRelay(*responses)
        client = RelayClient(
            BASE_URL,
            user_id=user_id,
            identity_header="X-User-Id",
            timeout=5.0,
            transport=httpx.MockTransport(relay),
        )
        return client, relay

    return _make


@pytest.fixture
def auth_headers() -> dict[str, str]:
    """Headers carrying a verified caller id."""
    return dict(AUTH_HEADERS)
