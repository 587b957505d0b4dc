"""Tests for the Gemini completion client, with the SDK client mocked out."""

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from google.genai import errors

from yuna_chat.core.errors import ConfigurationError, EmptyResponse, UpstreamError
from yuna_chat.services.llm.base import Message
from yuna_chat.services.llm.gemini import GeminiClient


def _response(*texts):
    candidates = [
        SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text=t)]))
        for t in texts
    ]
    return SimpleNamespace(candidates=candidates)


def _gemini(response=None, side_effect=None):
    sdk = MagicMock()
    sdk.aio.models.generate_content = AsyncMock(return_value=response, side_effect=side_effect)
    return GeminiClient(api_key="test-key", model="gemini-test", client=sdk), sdk


HISTORY = [
    Message(role="user", content="hi"),
    Message(role="assistant", content="hello"),
    Message(role="user", content="how are you?"),
]


def test_builds_request_with_roles_and_fixed_parameters():
    gemini, sdk = _gemini(_response("fine, thanks"))

    reply = asyncio.run(gemini.complete(HISTORY, "persona"))

    assert reply == "fine, thanks"
    kwargs = sdk.aio.models.generate_content.call_args.kwargs
    assert kwargs["model"] == "gemini-test"
    assert [c["role"] for c in kwargs["contents"]] == ["user", "model", "user"]
    assert kwargs["contents"][2]["parts"] == [{"text": "how are you?"}]

    config = kwargs["config"]
    assert config.system_instruction == "persona"
    assert config.temperature == 0.8
    assert config.top_p == 0.95
    assert config.top_k == 40
    assert config.max_output_tokens == 8192


def test_returns_first_candidate():
    gemini, _ = _gemini(_response("first", "second"))
    assert asyncio.run(gemini.complete(HISTORY, "persona")) == "first"


@pytest.mark.parametrize("response", [
    SimpleNamespace(candidates=None),
    SimpleNamespace(candidates=[]),
    SimpleNamespace(candidates=[SimpleNamespace(content=None)]),
    SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[]))]),
    _response(None),
    _response(""),
])
def test_empty_response(response):
    gemini, _ = _gemini(response)
    with pytest.raises(EmptyResponse):
        asyncio.run(gemini.complete(HISTORY, "persona"))


def test_upstream_error_carries_status():
    error = errors.ClientError(
        429, {"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
    )
    gemini, sdk = _gemini(side_effect=error)

    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(gemini.complete(HISTORY, "persona"))

    assert exc_info.value.status_code == 429
    assert "quota exceeded" in exc_info.value.message
    assert sdk.aio.models.generate_content.await_count == 1


@pytest.mark.parametrize("key", ["", "   ", "ใส่_API_KEY_ที่นี่"])
def test_missing_key_is_configuration_error(key):
    gemini = GeminiClient(api_key=key)
    with pytest.raises(ConfigurationError):
        asyncio.run(gemini.complete(HISTORY, "persona"))
