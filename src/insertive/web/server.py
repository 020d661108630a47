"""FastAPI server for the Insertive snippet dashboard API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from insertive.app import Insertive
from insertive.constants import APP_TITLE, VERSION, WEB_DEFAULT_HOST, WEB_DEFAULT_PORT
from insertive.errors import (
    DuplicateKey,
    IndexOutOfRange,
    InvalidKey,
    NotFound,
    PersistenceFailure,
    RepositoryClosed,
    SnippetError,
)
from insertive.web.api.snippets_routes import router as snippets_router
from insertive.web.api.status_routes import router as status_router

logger = logging.getLogger(__name__)

STATUS_CODES: dict[type[SnippetError], int] = {
    InvalidKey: 422,
    DuplicateKey: 409,
    NotFound: 404,
    IndexOutOfRange: 400,
    PersistenceFailure: 503,
    RepositoryClosed: 503,
}


def create_app(insertive: Insertive) -> FastAPI:
    """Build the API around an application instance.

    If the instance is not set up yet, the server's lifespan sets it up on
    startup and stops it on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = not insertive.running
        if owned:
            await insertive.setup()
        try:
            yield
        finally:
            if owned:
                insertive.stop()

    app = FastAPI(
        title=f"{APP_TITLE} Dashboard",
        version=VERSION,
        docs_url="/api/docs",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.insertive = insertive

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(status_router, prefix="/api")
    app.include_router(snippets_router, prefix="/api")
    app.add_exception_handler(SnippetError, _snippet_error_handler)
    return app


async def _snippet_error_handler(request: Request, exc: Exception) -> JSONResponse:
    status_code = STATUS_CODES.get(type(exc), 400)
    if isinstance(exc, PersistenceFailure):
        logger.warning("Snippet change kept in memory but not saved: %s", exc)
    body: dict = {"status": "error", "message": str(exc)}
    if isinstance(exc, InvalidKey):
        body["reason"] = exc.reason
    return JSONResponse(status_code=status_code, content=body)


def run_server(
    insertive: Insertive, host: str = WEB_DEFAULT_HOST, port: int = WEB_DEFAULT_PORT
) -> None:
    """Start the dashboard API server (blocking)."""
    import uvicorn

    logger.info("Starting %s dashboard API on http://%s:%d", APP_TITLE, host, port)
    uvicorn.run(create_app(insertive), host=host, port=port, log_level="info")
