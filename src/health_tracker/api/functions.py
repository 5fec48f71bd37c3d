"""Server-side AI collaborators: the health chat proxy and food analysis."""

import logging
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack
from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response, StreamingResponse

from health_tracker.api.auth import require_session
from health_tracker.api.schemas import AnalyzeFoodRequest, HealthChatRequest
from health_tracker.domain.chat import ChatTurn
from health_tracker.domain.sessions import UserSession
from health_tracker.services.assistant import AssistantError

if TYPE_CHECKING:
    from health_tracker.containers import AppContainer

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/functions", tags=["functions"])


@router.post("/health-chat")
async def health_chat(
    body: HealthChatRequest,
    request: Request,
    session: UserSession = Depends(require_session),
) -> Response:
    """Stream an assistant reply grounded in the caller's health data."""
    container: AppContainer = request.app.state.container
    if body.user_id is not None and body.user_id != session.user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)

    turns = [ChatTurn(role=turn.role, content=turn.content) for turn in body.messages]
    stack = AsyncExitStack()
    try:
        chunks = await stack.enter_async_context(
            container.assistant_service.stream(session, turns)
        )
    except AssistantError as exc:
        return JSONResponse(
            {"error": exc.message}, status_code=exc.status_code or 500
        )
    except Exception as exc:
        _logger.exception("Health chat failed")
        return JSONResponse({"error": str(exc) or "Unknown error"}, status_code=500)

    async def relay() -> AsyncIterator[bytes]:
        async with stack:
            async for chunk in chunks:
                yield chunk

    return StreamingResponse(relay(), media_type="text/event-stream")


@router.post("/analyze-food", dependencies=[Depends(require_session)])
async def analyze_food(body: AnalyzeFoodRequest, request: Request) -> JSONResponse:
    """Estimate nutrition for a named food and weight."""
    container: AppContainer = request.app.state.container
    if not (body.food_name or "").strip():
        return JSONResponse({"error": "Food name is required"}, status_code=400)
    try:
        analysis = await container.food_service.analyze(
            body.food_name, body.weight_grams
        )
    except Exception as exc:
        _logger.exception("Food analysis failed")
        return JSONResponse({"error": str(exc) or "Unknown error"}, status_code=500)
    return JSONResponse({"success": True, "data": analysis.model_dump(mode="json")})
