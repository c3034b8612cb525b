"""
FastAPI Application Factory & Configuration.

This module initializes the FastAPI application instance. It is responsible for:
1.  **Middleware Setup**: CORS so a browser front end can drive sessions.
2.  **Exception Handling**: Global handlers to ensure all errors return structured JSON.
3.  **Routing**: Mounting the catalog and session routers.
4.  **Lifecycle**: Creating the session store on startup and cancelling every
    pending autoplay timer on shutdown.

Design Pattern
--------------
We use an **Application Factory** pattern (`create_app`) so tests can spin up
separate app instances.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from algoplay import __version__
from algoplay.api.routers import algorithms, sessions
from algoplay.api.session_store import SessionStore
from algoplay.core.settings import get_logger, load_settings

logger = get_logger("algoplay.api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    ASGI Lifespan context manager.

    - **Startup**: Initialize the in-memory session store singleton.
    - **Shutdown**: Close every session so no timer thread outlives the app.
    """
    logger.info("Starting up...")
    SessionStore.get_instance()
    logger.info("SessionStore initialized.")

    yield

    logger.info("Shutting down...")
    SessionStore.get_instance().close_all()


def create_app() -> FastAPI:
    """
    Construct and configure the algoplay FastAPI application.

    Returns
    -------
    FastAPI
        The configured ASGI application ready to be served by Uvicorn.
    """
    app = FastAPI(
        title="algoplay API",
        description="Step-by-step algorithm playback",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Return structured JSON instead of a generic 500 page."""
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "detail": str(exc),
                "path": request.url.path,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        """Map Python ValueErrors to HTTP 400 Bad Request."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Bad Request",
                "detail": str(exc),
            },
        )

    app.include_router(algorithms.router)
    app.include_router(sessions.router)

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
