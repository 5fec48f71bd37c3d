"""Assistant conversation: history, streamed replies and persistence."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from health_tracker.domain.chat import ChatMessage, ChatTranscript, ChatTurn
from health_tracker.domain.sessions import UserSession
from health_tracker.services.chat_stream import iter_chat_stream

_logger = logging.getLogger(__name__)


class ChatMessageRepository(Protocol):
    """Persistence interface for chat messages."""

    def list_messages(self, user_id: UUID, limit: int) -> list[ChatMessage]:
        """Return the latest ``limit`` messages in chronological order."""

    def create_message(self, user_id: UUID, role: str, content: str) -> ChatMessage:
        """Append a message and return it."""

    def delete_messages(self, user_id: UUID) -> None:
        """Delete every message owned by the user."""


class ChatStreamSource(Protocol):
    """Opens an SSE chat completion body for a conversation."""

    def stream(
        self, session: UserSession, messages: list[ChatTurn]
    ) -> AbstractAsyncContextManager[AsyncIterator[bytes] | None]:
        """Yield the response body chunks, or None when there is no body."""


@dataclass
class ChatService:
    """Sends user turns and persists streamed assistant replies."""

    repository: ChatMessageRepository
    stream_source: ChatStreamSource
    history_limit: int = 100

    def get_history(self, session: UserSession) -> list[ChatMessage]:
        """Return the caller's persisted conversation."""
        return self.repository.list_messages(session.user_id, self.history_limit)

    def clear_history(self, session: UserSession) -> None:
        """Delete the caller's conversation."""
        self.repository.delete_messages(session.user_id)

    async def stream_reply(
        self,
        session: UserSession,
        content: str,
        abort: asyncio.Event | None = None,
    ) -> AsyncIterator[str]:
        """Persist the user turn, then yield the growing assistant reply.

        The final reply is persisted once the stream ends, if non-empty.
        """
        text = content.strip()
        self.repository.create_message(session.user_id, "user", text)
        turns = [
            ChatTurn(role=message.role, content=message.content, id=message.id)
            for message in self.get_history(session)
        ]

        reply = ""
        async with self.stream_source.stream(session, turns) as body:
            async for reply in iter_chat_stream(body, abort=abort):
                yield reply

        if reply:
            self.repository.create_message(session.user_id, "assistant", reply)
        else:
            _logger.warning("Assistant returned an empty reply")

    async def send_message(
        self,
        session: UserSession,
        content: str,
        transcript: ChatTranscript,
        abort: asyncio.Event | None = None,
    ) -> str:
        """Send a message, updating ``transcript`` live; return the reply."""
        transcript.append(ChatTurn(role="user", content=content.strip()))
        reply = ""
        async for reply in self.stream_reply(session, content, abort=abort):
            transcript.publish_assistant(reply)
        return reply
