"""Domain models for the assistant conversation."""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

GREETING = (
    "Hi! I'm your **AI health assistant**. I have access to your health data, "
    "meals, and activities.\n\nAsk me for dietary advice, health summaries, "
    "or any wellness questions!"
)


@dataclass(frozen=True)
class ChatMessage:
    """A persisted conversation turn."""

    id: UUID
    user_id: UUID
    role: str
    content: str
    created_at: datetime | None = None


@dataclass
class ChatTurn:
    """A turn in the visible transcript; ``id`` is set once persisted."""

    role: str
    content: str
    id: UUID | None = None

    def as_payload(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass
class ChatTranscript:
    """Visible list of turns, updated live while a reply streams in."""

    turns: list[ChatTurn] = field(default_factory=list)

    def append(self, turn: ChatTurn) -> None:
        self.turns.append(turn)

    def publish_assistant(self, content: str) -> None:
        """Replace the in-progress assistant turn, or start one."""
        if len(self.turns) > 1:
            last = self.turns[-1]
            if last.role == "assistant" and last.id is None:
                last.content = content
                return
        self.turns.append(ChatTurn(role="assistant", content=content))
