import json

import httpx
import pytest

from llm_service import (
    LLMConfig,
    LLMService,
    is_llm_error,
    parse_llm_error,
)


def _service(handler, **config):
    settings = {"api_key": "test-key", "max_retry_attempts": 1, "retry_backoff_base_sec": 0.0}
    settings.update(config)
    return LLMService(config=LLMConfig(**settings), transport=httpx.MockTransport(handler))


def test_error_sentinel_helpers():
    assert parse_llm_error("__LLM_ERR__auth|Invalid API key") == {"type": "auth", "detail": "Invalid API key"}
    assert parse_llm_error("__LLM_ERR__exception") == {"type": "exception", "detail": ""}
    assert parse_llm_error("plain text") == {}
    assert not is_llm_error("")


@pytest.mark.asyncio
async def test_generate_posts_chat_completion(llm, completions):
    text = await llm.generate_guidance("How should I face today?")
    assert json.loads(text)["gurbaniTuk"]["source"].startswith("Ang 469")

    request = completions.requests[0]
    assert request.headers["authorization"] == "Bearer test-key"
    payload = json.loads(request.content)
    assert payload["model"] == "gpt-4o"
    assert payload["response_format"] == {"type": "json_object"}
    assert payload["messages"][0]["role"] == "system"
    assert payload["messages"][1] == {"role": "user", "content": "How should I face today?"}


@pytest.mark.asyncio
async def test_request_key_overrides_configured_key(llm, completions):
    await llm.generate("hi", api_key="client-key")
    assert completions.requests[0].headers["authorization"] == "Bearer client-key"


@pytest.mark.asyncio
async def test_missing_key_is_not_configured():
    calls = []
    service = _service(lambda r: calls.append(r), api_key=None)
    assert not service.is_configured()
    assert service.is_configured("client-key")

    result = await service.generate("hi")
    assert parse_llm_error(result)["type"] == "not_configured"
    assert calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status_code, error_type",
    [(401, "auth"), (429, "rate_limit"), (500, "http_error"), (404, "http_error")],
)
async def test_http_failures_map_to_sentinels(status_code, error_type):
    service = _service(lambda r: httpx.Response(status_code, json={}))
    result = await service.generate("hi")
    assert is_llm_error(result)
    assert parse_llm_error(result)["type"] == error_type


@pytest.mark.asyncio
async def test_server_errors_are_retried():
    responses = [
        httpx.Response(503, json={}),
        httpx.Response(200, json={"choices": [{"message": {"content": "  ok  "}}]}),
    ]
    service = _service(lambda r: responses.pop(0), max_retry_attempts=2)
    assert await service.generate("hi") == "ok"
    assert responses == []


@pytest.mark.asyncio
async def test_transport_exception_becomes_sentinel():
    def boom(request):
        raise httpx.ConnectError("connection refused")

    result = await _service(boom).generate("hi")
    err = parse_llm_error(result)
    assert err["type"] == "exception"
    assert "connection refused" in err["detail"]


@pytest.mark.asyncio
async def test_empty_choices_give_empty_text():
    service = _service(lambda r: httpx.Response(200, json={"choices": []}))
    assert await service.generate("hi") == ""
