"""
Tests for the Gemini text completion client, using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from vocab_api.config import Settings
from vocab_api.core.errors import ProviderError
from vocab_api.core.llm_provider import DummyLLMProvider, GeminiProvider, build_provider


def make_provider(handler, **kwargs):
    return GeminiProvider(
        api_key="test-key",
        model="gemini-test",
        base_url="https://gemini.example/v1beta",
        transport=httpx.MockTransport(handler),
        **kwargs,
    )


def gemini_body(*texts):
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts]}}]}


def test_complete_posts_prompt_and_joins_parts():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=gemini_body('[{"word": ', '"x"}]'))

    text = asyncio.run(make_provider(handler).complete("hello model"))

    assert text == '[{"word": "x"}]'
    assert seen["url"] == "https://gemini.example/v1beta/models/gemini-test:generateContent"
    assert seen["key"] == "test-key"
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "hello model"


@pytest.mark.parametrize("status", [401, 429, 500])
def test_http_error_status_raises_provider_error(status):
    provider = make_provider(lambda request: httpx.Response(status, text="nope"))

    with pytest.raises(ProviderError) as exc_info:
        asyncio.run(provider.complete("p"))

    assert exc_info.value.detail["http_status"] == status


def test_transport_failure_raises_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ProviderError):
        asyncio.run(make_provider(handler).complete("p"))


@pytest.mark.parametrize("body", [{}, {"candidates": []}, gemini_body(""), {"candidates": [{"content": {}}]}])
def test_response_without_text_raises_provider_error(body):
    provider = make_provider(lambda request: httpx.Response(200, json=body))

    with pytest.raises(ProviderError):
        asyncio.run(provider.complete("p"))


def test_non_json_body_raises_provider_error():
    provider = make_provider(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(ProviderError):
        asyncio.run(provider.complete("p"))


def test_slow_call_is_bounded_by_timeout():
    async def handler(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=gemini_body("late"))

    provider = make_provider(handler, timeout_sec=0.05)

    with pytest.raises(ProviderError, match="timed out"):
        asyncio.run(provider.complete("p"))


def test_dummy_provider_returns_empty_array():
    assert asyncio.run(DummyLLMProvider().complete("anything")) == "[]"


def test_build_provider_picks_by_api_key():
    assert isinstance(build_provider(Settings(_env_file=None, gemini_api_key=None)), DummyLLMProvider)

    provider = build_provider(Settings(_env_file=None, gemini_api_key="k", ai_timeout_sec=7))
    assert isinstance(provider, GeminiProvider)
    assert provider.timeout_sec == 7
