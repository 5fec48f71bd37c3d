"""Tests for HTTP-based adapters."""

import asyncio
import json
from types import SimpleNamespace
from uuid import uuid4

import httpx
import pytest
from openai import APIStatusError

from health_tracker.adapters.ai_gateway_client import HttpxAiGatewayClient
from health_tracker.adapters.health_chat_client import HttpxHealthChatClient
from health_tracker.adapters.openai_food_analysis_client import (
    OpenAIFoodAnalysisClient,
)
from health_tracker.domain.chat import ChatTurn
from health_tracker.domain.sessions import UserSession
from health_tracker.services.assistant import GatewayStatusError
from health_tracker.services.chat_stream import (
    ChatRequestError,
    MissingResponseBodyError,
    read_chat_stream,
)
from health_tracker.services.foods import FoodAnalysisError
from tests.conftest import sse_chunks

_SESSION = UserSession(user_id=uuid4(), access_token="user-jwt")


def _gateway(handler) -> HttpxAiGatewayClient:  # type: ignore[no-untyped-def]
    return HttpxAiGatewayClient(
        api_key="gateway-key",
        base_url="https://gateway.test/v1",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _health_chat(handler) -> HttpxHealthChatClient:  # type: ignore[no-untyped-def]
    return HttpxHealthChatClient(
        url="https://functions.test/health-chat",
        public_key="anon-key",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_ai_gateway_client_streams_completion() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert str(request.url) == "https://gateway.test/v1/chat/completions"
        assert request.headers["Authorization"] == "Bearer gateway-key"
        payload = json.loads(request.content)
        assert payload["stream"] is True
        assert payload["model"] == "test-model"
        return httpx.Response(
            200,
            content=b"".join(sse_chunks("Stay ", "hydrated")),
            headers={"content-type": "text/event-stream"},
        )

    client = _gateway(handler)

    async def run() -> str:
        async with client.stream_chat_completion(
            model="test-model", messages=[{"role": "user", "content": "Hi"}]
        ) as body:
            return await read_chat_stream(body)

    assert asyncio.run(run()) == "Stay hydrated"


def test_ai_gateway_client_raises_status_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, text="slow down")

    client = _gateway(handler)

    async def run() -> None:
        async with client.stream_chat_completion(model="m", messages=[]):
            pass

    with pytest.raises(GatewayStatusError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.status_code == 429
    assert exc_info.value.body == "slow down"


def test_health_chat_client_posts_conversation() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer user-jwt"
        assert request.headers["apikey"] == "anon-key"
        payload = json.loads(request.content)
        assert payload == {
            "messages": [{"role": "user", "content": "Hello"}],
            "userId": str(_SESSION.user_id),
        }
        return httpx.Response(200, content=b"".join(sse_chunks("Hi!")))

    client = _health_chat(handler)

    async def run() -> str:
        async with client.stream(
            _SESSION, [ChatTurn(role="user", content="Hello")]
        ) as body:
            return await read_chat_stream(body)

    assert asyncio.run(run()) == "Hi!"


@pytest.mark.parametrize(
    ("response", "message"),
    [
        (
            httpx.Response(429, json={"error": "Rate limit exceeded."}),
            "Rate limit exceeded.",
        ),
        (httpx.Response(500, text="<html>oops</html>"), "Failed to get response"),
        (httpx.Response(400, json={"detail": "bad"}), "Failed to get response"),
    ],
)
def test_health_chat_client_reports_error_body(
    response: httpx.Response, message: str
) -> None:
    client = _health_chat(lambda request: response)

    async def run() -> None:
        async with client.stream(_SESSION, []):
            pass

    with pytest.raises(ChatRequestError) as exc_info:
        asyncio.run(run())

    assert exc_info.value.message == message
    assert exc_info.value.status_code == response.status_code


def test_health_chat_client_without_body() -> None:
    client = _health_chat(lambda request: httpx.Response(204))

    async def run() -> str:
        async with client.stream(_SESSION, []) as body:
            return await read_chat_stream(body)

    with pytest.raises(MissingResponseBodyError):
        asyncio.run(run())


class _FakeCompletions:
    def __init__(
        self, content: str | None = None, error: Exception | None = None
    ) -> None:
        self.content = content
        self.error = error
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class _FakeOpenAI:
    def __init__(self, completions: _FakeCompletions) -> None:
        self.chat = SimpleNamespace(completions=completions)


def test_openai_food_analysis_client_returns_content() -> None:
    completions = _FakeCompletions(content='{"calories": 52}')
    client = OpenAIFoodAnalysisClient(client=_FakeOpenAI(completions))

    result = asyncio.run(
        client.complete(
            model="google/gemini-2.5-flash",
            messages=[{"role": "user", "content": "Apple"}],
            temperature=0.3,
            max_tokens=500,
        )
    )

    assert result == '{"calories": 52}'
    assert completions.last_payload is not None
    assert completions.last_payload["temperature"] == 0.3


def test_openai_food_analysis_client_maps_status_errors() -> None:
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    error = APIStatusError(
        "rate limited", response=httpx.Response(429, request=request), body=None
    )
    client = OpenAIFoodAnalysisClient(client=_FakeOpenAI(_FakeCompletions(error=error)))

    with pytest.raises(FoodAnalysisError, match="AI Gateway error: 429"):
        asyncio.run(
            client.complete(model="m", messages=[], temperature=0.3, max_tokens=500)
        )


def test_openai_food_analysis_client_rejects_empty_answer() -> None:
    client = OpenAIFoodAnalysisClient(client=_FakeOpenAI(_FakeCompletions(content="")))

    with pytest.raises(RuntimeError, match="No response from AI"):
        asyncio.run(
            client.complete(model="m", messages=[], temperature=0.3, max_tokens=500)
        )
