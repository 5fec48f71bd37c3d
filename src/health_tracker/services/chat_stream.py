"""Incremental reader for Server-Sent-Events chat completion streams.

The line handling is a pure function, ``feed``, from a decoder state and newly
received text to a new state plus the delta fragments found. A ``data:`` line
whose JSON does not parse is pushed back onto the front of the buffer so the
next chunk can complete it; nothing is dropped.
"""

import asyncio
import codecs
import json
from collections.abc import AsyncIterable, AsyncIterator, Callable
from dataclasses import dataclass
from enum import Enum

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class ChatRequestError(RuntimeError):
    """The chat endpoint rejected the request before streaming began."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class MissingResponseBodyError(ChatRequestError):
    """The chat endpoint answered without a body to stream."""

    def __init__(self) -> None:
        super().__init__("No response body")


class ChatStreamAborted(RuntimeError):
    """The caller signalled abort before the stream finished."""

    def __init__(self, partial_text: str) -> None:
        super().__init__("Chat stream aborted")
        self.partial_text = partial_text


class StreamPhase(Enum):
    """Decoder states."""

    AWAITING_MORE_BYTES = "awaiting_more_bytes"
    HAVE_COMPLETE_LINE = "have_complete_line"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class SseState:
    """Unconsumed text plus the decoder phase."""

    buffer: str = ""
    phase: StreamPhase = StreamPhase.AWAITING_MORE_BYTES


def _phase_for(buffer: str) -> StreamPhase:
    if "\n" in buffer:
        return StreamPhase.HAVE_COMPLETE_LINE
    return StreamPhase.AWAITING_MORE_BYTES


def feed(state: SseState, text: str) -> tuple[SseState, list[str]]:
    """Consume ``text`` and return the new state with emitted content deltas."""
    if state.phase is StreamPhase.TERMINAL:
        return state, []

    buffer = state.buffer + text
    phase = _phase_for(buffer)
    deltas: list[str] = []
    while phase is StreamPhase.HAVE_COMPLETE_LINE:
        newline_index = buffer.index("\n")
        line = buffer[:newline_index]
        buffer = buffer[newline_index + 1 :]
        phase = _phase_for(buffer)

        line = line.removesuffix("\r")
        if line.startswith(":") or not line.strip():
            continue
        if not line.startswith(DATA_PREFIX):
            continue

        payload = line[len(DATA_PREFIX) :].strip()
        if payload == DONE_SENTINEL:
            return SseState(buffer=buffer, phase=StreamPhase.TERMINAL), deltas

        try:
            parsed = json.loads(payload)
        except json.JSONDecodeError:
            buffer = f"{line}\n{buffer}"
            return (
                SseState(buffer=buffer, phase=StreamPhase.AWAITING_MORE_BYTES),
                deltas,
            )

        content = extract_delta_content(parsed)
        if content:
            deltas.append(content)

    return SseState(buffer=buffer, phase=phase), deltas


def finish(state: SseState) -> tuple[SseState, list[str]]:
    """Flush a trailing unterminated line once the stream has closed."""
    if state.phase is StreamPhase.TERMINAL or not state.buffer:
        return SseState(buffer=state.buffer, phase=StreamPhase.TERMINAL), []
    flushed, deltas = feed(state, "\n")
    return SseState(buffer=flushed.buffer, phase=StreamPhase.TERMINAL), deltas


def extract_delta_content(event: object) -> str | None:
    """Return ``choices[0].delta.content`` from a completion chunk, if any."""
    if not isinstance(event, dict):
        return None
    choices = event.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


async def iter_chat_stream(
    chunks: AsyncIterable[bytes] | None,
    abort: asyncio.Event | None = None,
) -> AsyncIterator[str]:
    """Yield the accumulated assistant text each time it grows."""
    if chunks is None:
        raise MissingResponseBodyError

    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    state = SseState()
    content = ""
    async for chunk in chunks:
        if abort is not None and abort.is_set():
            raise ChatStreamAborted(content)
        state, deltas = feed(state, decoder.decode(chunk))
        for delta in deltas:
            content += delta
            yield content
        if state.phase is StreamPhase.TERMINAL:
            return

    state, deltas = feed(state, decoder.decode(b"", final=True))
    if state.phase is not StreamPhase.TERMINAL:
        _, tail = finish(state)
        deltas.extend(tail)
    for delta in deltas:
        content += delta
        yield content


async def read_chat_stream(
    chunks: AsyncIterable[bytes] | None,
    on_update: Callable[[str], None] | None = None,
    abort: asyncio.Event | None = None,
) -> str:
    """Read a chat stream to the end and return the final assistant text."""
    content = ""
    async for content in iter_chat_stream(chunks, abort=abort):
        if on_update is not None:
            on_update(content)
    return content
