"""Tests for the Gemini client and reply extraction."""

import json

import httpx
import pytest

from askai.client import GeminiClient, extract_text
from askai.exceptions import ServiceUnavailableError


def _client(handler, api_key="test-key"):
    return GeminiClient(
        api_key=api_key,
        model="gemini-2.0-flash",
        base_url="https://example.test/v1beta/",
        timeout=5,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_generate_content_sends_single_prompt(make_reply):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=make_reply("answer"))

    data = await _client(handler).generate_content("What is a monad?")

    assert extract_text(data) == "answer"
    assert seen["url"].path == "/v1beta/models/gemini-2.0-flash:generateContent"
    assert seen["url"].params["key"] == "test-key"
    assert seen["body"] == {"contents": [{"parts": [{"text": "What is a monad?"}]}]}


@pytest.mark.asyncio
async def test_missing_api_key_is_service_unavailable():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(ServiceUnavailableError, match="GEMINI_API_KEY"):
        await _client(handler, api_key=None).generate_content("hi")


@pytest.mark.asyncio
async def test_error_status_is_service_unavailable():
    def handler(request):
        return httpx.Response(400, json={"error": {"message": "API key not valid"}})

    with pytest.raises(ServiceUnavailableError, match="400"):
        await _client(handler).generate_content("hi")


@pytest.mark.asyncio
async def test_network_failure_is_service_unavailable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ServiceUnavailableError):
        await _client(handler).generate_content("hi")


@pytest.mark.asyncio
async def test_non_json_body_is_service_unavailable():
    def handler(request):
        return httpx.Response(200, text="<html>gateway</html>")

    with pytest.raises(ServiceUnavailableError, match="invalid JSON"):
        await _client(handler).generate_content("hi")


@pytest.mark.asyncio
async def test_non_object_body_is_service_unavailable():
    def handler(request):
        return httpx.Response(200, json=["not", "an", "object"])

    with pytest.raises(ServiceUnavailableError):
        await _client(handler).generate_content("hi")


def test_endpoint_strips_trailing_slash():
    client = GeminiClient(api_key="k", model="m", base_url="https://example.test/v1/")
    assert client.endpoint == "https://example.test/v1/models/m:generateContent"


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"candidates": []},
        {"candidates": [{}]},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"content": {"parts": [{"inlineData": {}}]}}]},
        {"candidates": [{"content": {"parts": [{"text": 42}]}}]},
        {"candidates": "oops"},
    ],
)
def test_extract_text_missing_path_returns_none(data):
    assert extract_text(data) is None


def test_extract_text_takes_first_candidate_first_part():
    data = {
        "candidates": [
            {"content": {"parts": [{"text": "first"}, {"text": "second"}]}},
            {"content": {"parts": [{"text": "other"}]}},
        ]
    }
    assert extract_text(data) == "first"
