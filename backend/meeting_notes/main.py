"""ASGI entry-point for the FastAPI application.

This module
1. instantiates the :class:`fastapi.FastAPI` application;
2. wires the routers located in ``meeting_notes.api``;
3. registers global exception handlers and middleware; and
4. logs the effective configuration at start-up so operators can spot a
   missing provider key or SMTP host before the first request fails.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from meeting_notes import __version__
from meeting_notes.api import api_router, page_router
from meeting_notes.config import settings
from meeting_notes.exceptions import AppBaseException
from meeting_notes.logging_config import setup_logging
from meeting_notes.middleware import BodySizeLimitMiddleware
from meeting_notes.services.share_store import ShareStore


# ---------------------------------------------------------------------------
# Logging must be configured as soon as possible so that any errors during
# import/start-up are captured.
# ---------------------------------------------------------------------------
setup_logging()
logger = logging.getLogger(__name__)


def _describe_validation_errors(errors: list[dict[str, Any]]) -> str:
    parts = []
    for error in errors:
        location = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "Invalid request body: " + "; ".join(parts)


def create_app(share_store: Optional[ShareStore] = None) -> FastAPI:  # noqa: D401 – factory nomenclature is fine
    """Wire and return the FastAPI application instance.

    ``share_store`` lets callers (tests, mostly) supply their own store; by
    default every application gets a fresh, empty one.
    """

    app = FastAPI(
        title=settings.APP_TITLE,
        version=__version__,
        docs_url="/api/docs",
    )
    app.state.share_store = share_store if share_store is not None else ShareStore()

    # ------------------------------------------------------------------
    # Start-up checks
    # ------------------------------------------------------------------

    @app.on_event("startup")
    async def _startup_checks() -> None:  # noqa: D401
        logger.info("Running start-up checks …")
        logger.info("Public base URL: %s", settings.PUBLIC_BASE_URL)
        logger.info("CORS origins: %s", settings.cors_origins)
        logger.info(
            "Summarization provider: %s (model=%s)",
            settings.OPENROUTER_BASE_URL, settings.OPENROUTER_MODEL,
        )
        if not settings.OPENROUTER_API_KEY:
            logger.warning("OPENROUTER_API_KEY is not set; /api/summarize will fail.")
        if not settings.SMTP_HOST:
            logger.warning("SMTP_HOST is not set; /api/send-email will fail.")
        else:
            logger.info("SMTP server: %s:%s (ssl=%s)", settings.SMTP_HOST, settings.SMTP_PORT, settings.SMTP_USE_SSL)
        logger.info("Start-up checks finished.")

    # ------------------------------------------------------------------
    # Exception handlers – every failure becomes {"error": "..."}
    # ------------------------------------------------------------------

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(  # noqa: D401
        _request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.warning("Request validation error: %s", exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _describe_validation_errors(exc.errors())},
        )

    @app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(  # noqa: D401
        _request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.error("HTTP exception %s: %s", exc.status_code, exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(AppBaseException)
    async def _app_error_handler(  # noqa: D401
        _request: Request,
        exc: AppBaseException,
    ) -> JSONResponse:  # type: ignore[valid-type]
        if exc.status_code >= 500:
            logger.error("Application exception: %s", exc.detail, exc_info=True)
        else:
            logger.info("Rejected request: %s", exc.detail)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(Exception)
    async def _generic_error_handler(  # noqa: D401
        _request: Request,
        exc: Exception,
    ) -> JSONResponse:  # type: ignore[valid-type]
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})

    # ------------------------------------------------------------------
    # Middleware
    # ------------------------------------------------------------------

    app.add_middleware(BodySizeLimitMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ------------------------------------------------------------------
    # Routers
    # ------------------------------------------------------------------

    app.include_router(api_router, prefix="/api")
    app.include_router(page_router, tags=["share"])

    # ------------------------------------------------------------------
    # Miscellaneous endpoints
    # ------------------------------------------------------------------

    @app.get("/api/health")
    async def _health() -> dict[str, Any]:  # noqa: D401
        now = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
        return {"ok": True, "time": now.replace("+00:00", "Z")}

    return app


# Instantiate at import time so `uvicorn meeting_notes.main:app` works.
app: FastAPI = create_app()


def run() -> None:
    """Serve the application on ``HOST:PORT``."""
    logger.info("Server listening on http://%s:%s", settings.HOST, settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
