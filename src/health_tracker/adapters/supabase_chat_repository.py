"""Supabase-backed chat message repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from health_tracker.adapters.supabase_rows import parse_timestamp
from health_tracker.domain.chat import ChatMessage
from health_tracker.services.chat import ChatMessageRepository


@dataclass
class SupabaseChatRepository(ChatMessageRepository):
    """Supabase implementation for chat history."""

    client: Client

    def list_messages(self, user_id: UUID, limit: int) -> list[ChatMessage]:
        """Return the latest messages in chronological order."""
        response = (
            self.client.table("chat_messages")
            .select("id, user_id, role, content, created_at")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        messages = [_parse_message(row) for row in response.data or []]
        messages.reverse()
        return messages

    def create_message(self, user_id: UUID, role: str, content: str) -> ChatMessage:
        """Insert a chat message and return it."""
        response = (
            self.client.table("chat_messages")
            .insert({"user_id": str(user_id), "role": role, "content": content})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save chat message")
        return _parse_message(response.data[0])

    def delete_messages(self, user_id: UUID) -> None:
        """Delete all chat messages for a user."""
        self.client.table("chat_messages").delete().eq(
            "user_id", str(user_id)
        ).execute()


def _parse_message(row: dict[str, object]) -> ChatMessage:
    return ChatMessage(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        role=str(row.get("role", "")),
        content=str(row.get("content", "")),
        created_at=parse_timestamp(row.get("created_at")),
    )
