"""Tests for the chat-completion client, with the OpenAI SDK replaced by a fake."""
from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List

import httpx
import openai
import pytest

from config import Settings
from errors import UpstreamError
from services import openai_service
from services.openai_service import CompletionClient

API_URL = "https://api.openai.com/v1/chat/completions"


def _chat(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


class FakeOpenAI:
    instances: List["FakeOpenAI"] = []
    result: Any = None

    def __init__(self, **kwargs: Any) -> None:
        self.kwargs = kwargs
        self.calls: List[Dict[str, Any]] = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))
        FakeOpenAI.instances.append(self)

    def _create(self, **kwargs: Any):
        self.calls.append(kwargs)
        if isinstance(FakeOpenAI.result, Exception):
            raise FakeOpenAI.result
        return FakeOpenAI.result


@pytest.fixture
def fake_openai(monkeypatch):
    FakeOpenAI.instances = []
    FakeOpenAI.result = _chat('{"days": []}')
    monkeypatch.setattr(openai_service, "OpenAI", FakeOpenAI)
    return FakeOpenAI


@pytest.fixture
def client() -> CompletionClient:
    return CompletionClient(Settings(OPENAI_API_KEY="sk-test", OPENAI_MODEL="gpt-3.5-turbo"))


def test_complete_sends_json_mode_request(fake_openai, client):
    assert client.complete("plan a trip") == '{"days": []}'

    sdk = fake_openai.instances[0]
    assert sdk.kwargs["api_key"] == "sk-test"
    assert sdk.kwargs["max_retries"] == 0
    assert sdk.kwargs["timeout"] == 60.0

    call = sdk.calls[0]
    assert call["model"] == "gpt-3.5-turbo"
    assert call["messages"] == [{"role": "user", "content": "plan a trip"}]
    assert call["temperature"] == 0.7
    assert call["response_format"] == {"type": "json_object"}


def test_client_is_reused(fake_openai, client):
    client.complete("a")
    client.complete("b")
    assert len(fake_openai.instances) == 1


def test_missing_api_key(fake_openai):
    client = CompletionClient(Settings(OPENAI_API_KEY=""))
    with pytest.raises(UpstreamError, match="API key not configured"):
        client.complete("plan a trip")
    assert fake_openai.instances == []


def test_transport_failure(fake_openai, client):
    fake_openai.result = openai.APIConnectionError(request=httpx.Request("POST", API_URL))
    with pytest.raises(UpstreamError, match="Connection error."):
        client.complete("plan a trip")


def test_non_success_status(fake_openai, client):
    request = httpx.Request("POST", API_URL)
    fake_openai.result = openai.AuthenticationError(
        "Incorrect API key provided",
        response=httpx.Response(401, request=request),
        body=None,
    )
    with pytest.raises(UpstreamError, match="Incorrect API key provided"):
        client.complete("plan a trip")


def test_empty_choices(fake_openai, client):
    fake_openai.result = SimpleNamespace(choices=[])
    with pytest.raises(UpstreamError, match="no choices"):
        client.complete("plan a trip")


def test_empty_content(fake_openai, client):
    fake_openai.result = _chat(None)
    with pytest.raises(UpstreamError, match="empty message"):
        client.complete("plan a trip")
