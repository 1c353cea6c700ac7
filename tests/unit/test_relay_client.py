"""Unit tests for promptdeck.ui.client: the httpx relay client."""

import httpx
import pytest

from promptdeck.ui.client import (
    IMAGE_FAILED_MESSAGE,
    SEND_FAILED_MESSAGE,
    RelayClient,
    RelayRequestError,
    error_message_from_response,
)

MESSAGES = [{"id": "u1", "role": "user", "content": "write a fizzbuzz function"}]


class TestErrorMessageFromResponse:
    """Deriving user-facing messages from failed responses."""

    def test_structured_message_used(self):
        response = httpx.Response(400, json={"message": "Prompt too long"})
        assert error_message_from_response(response, "fallback") == "Prompt too long"

    def test_plain_text_uses_fallback(self):
        response = httpx.Response(401, text="Unauthorized")
        assert error_message_from_response(response, "fallback") == "fallback"

    def test_json_without_message_uses_fallback(self):
        response = httpx.Response(500, json={"detail": "x"})
        assert error_message_from_response(response, "fallback") == "fallback"

    def test_blank_message_uses_fallback(self):
        response = httpx.Response(500, json={"message": "  "})
        assert error_message_from_response(response, "fallback") == "fallback"


class TestSendConversation:
    """Tests for RelayClient.send_conversation."""

    @pytest.mark.asyncio
    async def test_posts_full_transcript(self, make_relay_client):
        client, relay = make_relay_client(
            httpx.Response(200, json={"role": "assistant", "content": "ok"})
        )

        data = await client.send_conversation(MESSAGES)

        assert data == {"role": "assistant", "content": "ok"}
        assert relay.requests[0].url.path == "/api/code"
        assert relay.body() == {"messages": MESSAGES}

    @pytest.mark.asyncio
    async def test_sends_identity_header(self, make_relay_client):
        client, relay = make_relay_client(httpx.Response(200, json={}))
        await client.send_conversation(MESSAGES)
        assert relay.requests[0].headers["X-User-Id"] == "user_123"

    @pytest.mark.asyncio
    async def test_no_identity_header_without_user(self, make_relay_client):
        client, relay = make_relay_client(httpx.Response(200, json={}), user_id=None)
        await client.send_conversation(MESSAGES)
        assert "X-User-Id" not in relay.requests[0].headers

    @pytest.mark.asyncio
    async def test_plain_text_error_is_generic(self, make_relay_client):
        client, _ = make_relay_client(httpx.Response(500, text="No response from OpenAI."))

        with pytest.raises(RelayRequestError) as exc_info:
            await client.send_conversation(MESSAGES)

        assert exc_info.value.message == SEND_FAILED_MESSAGE
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_structured_error_message(self, make_relay_client):
        client, _ = make_relay_client(httpx.Response(400, json={"message": "Too long"}))

        with pytest.raises(RelayRequestError) as exc_info:
            await client.send_conversation(MESSAGES)

        assert exc_info.value.message == "Too long"

    @pytest.mark.asyncio
    async def test_transport_failure(self, make_relay_client):
        client, _ = make_relay_client(httpx.ConnectError("refused"))

        with pytest.raises(RelayRequestError) as exc_info:
            await client.send_conversation(MESSAGES)

        assert exc_info.value.message == SEND_FAILED_MESSAGE
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_non_json_success_body(self, make_relay_client):
        client, _ = make_relay_client(httpx.Response(200, text="<html>"))
        with pytest.raises(RelayRequestError):
            await client.send_conversation(MESSAGES)


class TestGenerateImages:
    """Tests for RelayClient.generate_images."""

    @pytest.mark.asyncio
    async def test_returns_urls_in_order(self, make_relay_client):
        client, relay = make_relay_client(
            httpx.Response(200, json=[{"url": "https://a"}, {"url": "https://b"}])
        )

        urls = await client.generate_images("a horse", "2", "512x512")

        assert urls == ["https://a", "https://b"]
        assert relay.requests[0].url.path == "/api/image"
        assert relay.body() == {"prompt": "a horse", "amount": "2", "resolution": "512x512"}

    @pytest.mark.asyncio
    async def test_malformed_body(self, make_relay_client):
        client, _ = make_relay_client(httpx.Response(200, json={"url": "https://a"}))
        with pytest.raises(RelayRequestError) as exc_info:
            await client.generate_images("a horse", "1", "512x512")
        assert exc_info.value.message == IMAGE_FAILED_MESSAGE


class TestFromConfig:
    def test_uses_config_values(self, test_config):
        client = RelayClient.from_config(test_config)
        assert client.base_url == "http://relay.test"
        assert client.identity_header == "X-User-Id"
        assert client.timeout == test_config.request_timeout

    def test_trailing_slash_stripped(self):
        assert RelayClient("http://relay.test/").base_url == "http://relay.test"
