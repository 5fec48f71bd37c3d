"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from health_tracker.api.chat import router as chat_router
from health_tracker.api.foods import router as foods_router
from health_tracker.api.functions import router as functions_router
from health_tracker.api.tracking import router as tracking_router
from health_tracker.app_logging import configure_logging
from health_tracker.config import parse_allowed_origins
from health_tracker.containers import AppContainer

_ALLOWED_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info("Starting health tracker API (%s)", container.settings.environment)
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_allowed_origins(container.settings.allowed_origins),
        allow_methods=["*"],
        allow_headers=_ALLOWED_HEADERS,
    )

    app.include_router(tracking_router)
    app.include_router(chat_router)
    app.include_router(foods_router)
    app.include_router(functions_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
