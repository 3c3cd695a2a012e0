"""
FastAPI Application Factory & Configuration.

This module initializes the dicetrail HTTP application. It is responsible for:
1.  **Middleware Setup**: CORS so browser-based renderers can call the API.
2.  **Exception Handling**: construction errors become structured JSON
    (400 for explanation errors, 422 for payload validation errors).
3.  **Routing**: mounting the explain router and the health probe.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`) so tests can build
isolated app instances.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from dicetrail import __version__
from dicetrail.api.routers import explain
from dicetrail.core.errors import ExplanationError
from dicetrail.core.settings import get_logger, load_settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """ASGI lifespan: log startup/shutdown with the active environment."""
    logger.info("dicetrail API starting (env=%s)", load_settings().environment)
    yield
    logger.info("dicetrail API shutting down")


def create_app() -> FastAPI:
    """
    Construct and configure the dicetrail FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="dicetrail API",
        description="Explain how a dice result was calculated",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # -----------------------------------------------------------------------
    # Middleware
    # -----------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -----------------------------------------------------------------------
    # Exception Handlers
    # -----------------------------------------------------------------------
    @app.exception_handler(ExplanationError)
    async def explanation_error_handler(request: Request, exc: ExplanationError) -> JSONResponse:
        """Map construction failures to HTTP 400 Bad Request."""
        logger.debug("Rejected explanation on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=400,
            content={
                "error": type(exc).__name__,
                "detail": str(exc),
            },
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        """Map descriptor/payload validation failures to HTTP 422."""
        return JSONResponse(
            status_code=422,
            content={
                "error": "Unprocessable Entity",
                "detail": exc.errors(include_url=False, include_context=False),
            },
        )

    # -----------------------------------------------------------------------
    # Routes
    # -----------------------------------------------------------------------
    app.include_router(explain.router)

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Simple liveness probe."""
        return {
            "status": "ok",
            "environment": load_settings().environment,
            "version": __version__,
        }

    return app


__all__ = ["create_app"]
