"""OpenAI-compatible AI gateway client for streamed chat completions."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from health_tracker.services.assistant import ChatGateway, GatewayStatusError

_STREAM_TIMEOUT = httpx.Timeout(15.0, read=None)


@dataclass
class HttpxAiGatewayClient(ChatGateway):
    """HTTPX-backed client that relays the gateway's SSE body."""

    api_key: str
    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "HttpxAiGatewayClient":
        """Create a gateway client with a managed httpx session."""
        return cls(
            api_key=api_key,
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(timeout=_STREAM_TIMEOUT),
        )

    @asynccontextmanager
    async def stream_chat_completion(
        self, *, model: str, messages: list[dict[str, str]]
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        """Open a streamed completion and yield its raw body chunks."""
        request = self.http_client.build_request(
            "POST",
            f"{self.base_url}/chat/completions",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"model": model, "messages": messages, "stream": True},
        )
        response = await self.http_client.send(request, stream=True)
        try:
            if not response.is_success:
                body = (await response.aread()).decode("utf-8", errors="replace")
                raise GatewayStatusError(response.status_code, body)
            yield response.aiter_bytes()
        finally:
            await response.aclose()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
