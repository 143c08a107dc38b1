from __future__ import annotations

import httpx
import pytest

from devmentor.core.errors import TransportFailure
from devmentor.core.llm_provider import GeminiLLMProvider, NullLLMProvider, build_llm_provider
from devmentor.core.resilience import CircuitState, retry_with_backoff
from devmentor.core.settings import Settings


def _settings(**overrides) -> Settings:
    values = {"llm_provider": "gemini", "gemini_api_key": "test-key", "llm_max_retries": 1}
    values.update(overrides)
    return Settings(**values)


def _provider(handler, **overrides) -> GeminiLLMProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return GeminiLLMProvider(_settings(**overrides), http_client=client)


def _candidate(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}, "finishReason": "STOP"}]}


@pytest.mark.asyncio
async def test_generate_posts_prompt_and_returns_text():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["key"] = request.headers.get("x-goog-api-key")
        seen["body"] = request.read().decode()
        return httpx.Response(200, json=_candidate('{"ok": true}'))

    provider = _provider(handler)
    text, usage = await provider.generate("Review this", json_mode=True)

    assert text == '{"ok": true}'
    assert usage["provider"] == "gemini"
    assert usage["finish_reason"] == "STOP"
    assert seen["url"].endswith("/gemini-2.0-flash:generateContent")
    assert seen["key"] == "test-key"
    assert "Review this" in seen["body"]
    assert "application/json" in seen["body"]


@pytest.mark.asyncio
async def test_api_key_in_configured_url_is_stripped():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        return httpx.Response(200, json=_candidate("hi"))

    provider = _provider(handler, gemini_api_url="https://example.test/v1/models/m:generateContent?key=leaked&alt=json")
    await provider.generate("hello")
    assert "leaked" not in seen["url"]
    assert "alt=json" in seen["url"]


@pytest.mark.asyncio
async def test_missing_key_short_circuits_without_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    provider = _provider(handler, gemini_api_key="")
    text, usage = await provider.generate("hello")
    assert text is None
    assert usage["reason"] == "missing_api_key"


@pytest.mark.asyncio
async def test_http_error_raises_transport_failure_and_opens_breaker():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"error": "unavailable"})

    provider = _provider(handler)
    for _ in range(provider.breaker.failure_threshold):
        with pytest.raises(TransportFailure) as excinfo:
            await provider.generate("hello")
        assert excinfo.value.status_code == 503
        assert excinfo.value.reason == "http_status_503"

    assert provider.breaker.state is CircuitState.OPEN
    text, usage = await provider.generate("hello")
    assert text is None
    assert usage["reason"] == "circuit_open"


@pytest.mark.asyncio
async def test_no_candidates_is_an_empty_answer():
    provider = _provider(lambda request: httpx.Response(200, json={"candidates": []}))
    text, usage = await provider.generate("hello")
    assert text is None
    assert usage["reason"] == "no_candidates"


@pytest.mark.asyncio
async def test_connect_error_is_retried_then_reported():
    calls = {"n": 0}

    def handler(request: httpx.Request) -> httpx.Response:
        calls["n"] += 1
        if calls["n"] == 1:
            raise httpx.ConnectError("refused", request=request)
        return httpx.Response(200, json=_candidate("second time lucky"))

    provider = _provider(handler, llm_max_retries=2)
    text, _usage = await provider.generate("hello")
    assert text == "second time lucky"
    assert calls["n"] == 2

    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("down", request=request)

    failing = _provider(refuse)
    with pytest.raises(TransportFailure):
        await failing.generate("hello")


@pytest.mark.asyncio
async def test_retry_gives_up_after_last_attempt():
    attempts = []

    async def flaky():
        attempts.append(1)
        raise ConnectionError("nope")

    with pytest.raises(ConnectionError):
        await retry_with_backoff(flaky, max_retries=3, base_delay_seconds=0)
    assert len(attempts) == 3


def test_factory_selects_provider():
    assert isinstance(build_llm_provider(_settings()), GeminiLLMProvider)
    assert isinstance(build_llm_provider(_settings(llm_provider="none")), NullLLMProvider)
