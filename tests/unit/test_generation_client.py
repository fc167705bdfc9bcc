"""Tests for the chat-completions client.

HTTP is mocked with respx; no request leaves the process.
"""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from news_enricher.core.exceptions import (
    GenerationAuthError,
    GenerationError,
    GenerationRateLimitError,
)
from news_enricher.enrichment._generation_client import TextGenerationClient

API_URL = "https://llm.example.com/v1/chat/completions"


def _ok(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def _client(http: httpx.AsyncClient, api_key: str = "sk-test") -> TextGenerationClient:
    return TextGenerationClient(http, api_url=API_URL, api_key=api_key, model="test-model")


@pytest.mark.asyncio
class TestComplete:
    async def test_returns_message_content_and_sends_payload(self) -> None:
        with respx.mock:
            route = respx.post(API_URL).mock(return_value=_ok("hello"))
            async with httpx.AsyncClient() as http:
                text = await _client(http).complete(
                    "sys", "user", json_object=True, temperature=0.3, max_tokens=150
                )

        assert text == "hello"
        request = route.calls.last.request
        assert request.headers["Authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body["model"] == "test-model"
        assert body["messages"] == [
            {"role": "system", "content": "sys"},
            {"role": "user", "content": "user"},
        ]
        assert body["temperature"] == 0.3
        assert body["max_tokens"] == 150
        assert body["response_format"] == {"type": "json_object"}

    async def test_plain_text_request_has_no_response_format(self) -> None:
        with respx.mock:
            route = respx.post(API_URL).mock(return_value=_ok("x"))
            async with httpx.AsyncClient() as http:
                await _client(http).complete("sys", "user")

        assert "response_format" not in json.loads(route.calls.last.request.content)

    async def test_missing_api_key_fails_before_request(self) -> None:
        with respx.mock(assert_all_called=False) as router:
            route = router.post(API_URL).mock(return_value=_ok("x"))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationAuthError):
                    await _client(http, api_key="").complete("sys", "user")

        assert not route.called


@pytest.mark.asyncio
class TestErrorMapping:
    async def test_rate_limit_with_retry_after(self) -> None:
        with respx.mock:
            respx.post(API_URL).mock(
                return_value=httpx.Response(429, headers={"Retry-After": "12"})
            )
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationRateLimitError) as exc_info:
                    await _client(http).complete("sys", "user")

        assert exc_info.value.retry_after == 12.0

    @pytest.mark.parametrize("status", [401, 403])
    async def test_auth_errors(self, status: int) -> None:
        with respx.mock:
            respx.post(API_URL).mock(return_value=httpx.Response(status))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationAuthError):
                    await _client(http).complete("sys", "user")

    async def test_server_error(self) -> None:
        with respx.mock:
            respx.post(API_URL).mock(return_value=httpx.Response(502, text="bad gateway"))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationError, match="502"):
                    await _client(http).complete("sys", "user")

    async def test_network_error(self) -> None:
        with respx.mock:
            respx.post(API_URL).mock(side_effect=httpx.ConnectError("refused"))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationError, match="network error"):
                    await _client(http).complete("sys", "user")

    async def test_body_without_content(self) -> None:
        with respx.mock:
            respx.post(API_URL).mock(return_value=httpx.Response(200, json={"choices": []}))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationError, match="no message content"):
                    await _client(http).complete("sys", "user")

    async def test_body_not_json(self) -> None:
        with respx.mock:
            respx.post(API_URL).mock(return_value=httpx.Response(200, text="<html>"))
            async with httpx.AsyncClient() as http:
                with pytest.raises(GenerationError, match="JSON parse error"):
                    await _client(http).complete("sys", "user")
