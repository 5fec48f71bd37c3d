"""Assistant conversation endpoints."""

import json
import logging
from collections.abc import AsyncIterator
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from fastapi.responses import StreamingResponse

from health_tracker.api.auth import require_session
from health_tracker.api.schemas import ChatMessageCreate
from health_tracker.domain.chat import GREETING
from health_tracker.domain.sessions import UserSession
from health_tracker.services.chat_stream import (
    DATA_PREFIX,
    DONE_SENTINEL,
    ChatRequestError,
)

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/messages")
async def list_messages(
    request: Request, session: UserSession = Depends(require_session)
) -> dict[str, object]:
    """Return the caller's conversation, oldest first."""
    container: AppContainer = request.app.state.container
    return {
        "greeting": GREETING,
        "messages": container.chat_service.get_history(session),
    }


@router.delete("/messages", status_code=status.HTTP_204_NO_CONTENT)
async def clear_messages(
    request: Request, session: UserSession = Depends(require_session)
) -> Response:
    """Delete the caller's conversation."""
    container: AppContainer = request.app.state.container
    container.chat_service.clear_history(session)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/messages")
async def send_message(
    body: ChatMessageCreate,
    request: Request,
    session: UserSession = Depends(require_session),
) -> StreamingResponse:
    """Send a message and stream the growing assistant reply as SSE."""
    container: AppContainer = request.app.state.container
    if not body.content.strip():
        raise HTTPException(status_code=422, detail="Message is empty")

    updates = container.chat_service.stream_reply(session, body.content)
    first: str | None = None
    try:
        first = await anext(updates)
    except StopAsyncIteration:
        pass
    except ChatRequestError as exc:
        _logger.warning("Chat request failed: %s", exc.message)
        raise HTTPException(
            status_code=exc.status_code or status.HTTP_502_BAD_GATEWAY,
            detail=exc.message,
        ) from exc

    async def events() -> AsyncIterator[str]:
        try:
            if first is not None:
                yield _assistant_event(first)
                async for reply in updates:
                    yield _assistant_event(reply)
            yield f"{DATA_PREFIX}{DONE_SENTINEL}\n\n"
        finally:
            await updates.aclose()

    return StreamingResponse(events(), media_type="text/event-stream")


def _assistant_event(content: str) -> str:
    payload = json.dumps({"role": "assistant", "content": content})
    return f"{DATA_PREFIX}{payload}\n\n"
