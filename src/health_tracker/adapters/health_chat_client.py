"""Client for a deployed health-chat endpoint."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

import httpx

from health_tracker.domain.chat import ChatTurn
from health_tracker.domain.sessions import UserSession
from health_tracker.services.chat import ChatStreamSource
from health_tracker.services.chat_stream import ChatRequestError

_logger = logging.getLogger(__name__)

_DEFAULT_ERROR = "Failed to get response"


@dataclass
class HttpxHealthChatClient(ChatStreamSource):
    """Posts the conversation to the health-chat function and streams the reply."""

    url: str
    public_key: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, url: str, public_key: str) -> "HttpxHealthChatClient":
        """Create a client with a managed httpx session."""
        return cls(
            url=url,
            public_key=public_key,
            http_client=httpx.AsyncClient(timeout=httpx.Timeout(15.0, read=None)),
        )

    @asynccontextmanager
    async def stream(
        self, session: UserSession, messages: list[ChatTurn]
    ) -> AsyncIterator[AsyncIterator[bytes] | None]:
        """Yield the SSE body, or None when the response has no body."""
        headers = {"Authorization": f"Bearer {session.access_token}"}
        if self.public_key:
            headers["apikey"] = self.public_key
        request = self.http_client.build_request(
            "POST",
            self.url,
            headers=headers,
            json={
                "messages": [turn.as_payload() for turn in messages],
                "userId": str(session.user_id),
            },
        )
        response = await self.http_client.send(request, stream=True)
        try:
            if not response.is_success:
                await response.aread()
                raise ChatRequestError(
                    _error_message(response), status_code=response.status_code
                )
            if _has_no_body(response):
                yield None
            else:
                yield response.aiter_bytes()
        finally:
            await response.aclose()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _has_no_body(response: httpx.Response) -> bool:
    if response.status_code == httpx.codes.NO_CONTENT:
        return True
    return response.headers.get("content-length") == "0"


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        _logger.warning("Health chat error without JSON body: %s", response.status_code)
        return _DEFAULT_ERROR
    if isinstance(payload, dict) and isinstance(payload.get("error"), str):
        return payload["error"]
    return _DEFAULT_ERROR
