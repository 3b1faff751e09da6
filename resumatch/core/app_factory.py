"""Application factory for the FastAPI app hosting the analysis page model."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from resumatch.api.routes import health_router, match_router
from resumatch.api.routes.match import close_match_client
from resumatch.core.config import settings
from resumatch.core.exception_handlers import setup_exception_handlers
from resumatch.core.logging import configure_logging
from resumatch.core.middleware import request_id_middleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Release the match service connection pool on shutdown."""
    yield
    await close_match_client()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application instance.

    Returns:
        Configured FastAPI app with middleware, handlers and routers.
    """
    # Logging first so subsequent init logs are formatted as desired
    configure_logging(settings.log)

    app = FastAPI(
        title="Resumatch",
        description=(
            "Submits a resume and a job description to the matching service and "
            "returns a render-ready view: overall match, semantic, skill overlap "
            "and impact scores with High/Medium/Low categories, plus the missing "
            "keywords."
        ),
        version="0.1.0",
        debug=settings.app.debug,
        lifespan=lifespan,
    )

    app.middleware("http")(request_id_middleware)
    setup_exception_handlers(app)

    app.include_router(match_router, prefix="/v1")
    app.include_router(health_router)

    return app
