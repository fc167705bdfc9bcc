"""FastAPI application factory and entry point.

Creates the application instance, registers middleware and routers, and
owns the lifetime of the shared HTTP client and the news service.

Usage::

    # Development server (from project root)
    uvicorn news_enricher.api.main:app --reload
"""

from __future__ import annotations

import time
import uuid
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable

import httpx
import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from news_enricher import __version__
from news_enricher.config.settings import get_settings
from news_enricher.core.exceptions import PipelineRunError
from news_enricher.core.logging_config import configure_logging, request_id_var
from news_enricher.core.schemas import ErrorPayload
from news_enricher.pipeline.service import NewsService, build_news_service

# ---------------------------------------------------------------------------
# Logging configuration: applied once at import time so that records emitted
# during app construction are captured.  The level is re-applied inside
# create_app() after settings are loaded.
# ---------------------------------------------------------------------------

configure_logging("INFO")

logger = structlog.get_logger(__name__)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


def create_app(news_service: NewsService | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    Args:
        news_service: Pre-built service.  Tests pass one wired to fakes.
            When ``None`` the lifespan builds the real service around a
            shared :class:`httpx.AsyncClient` and closes the client on
            shutdown.

    Returns:
        A fully configured ``FastAPI`` instance.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(application: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "application_startup",
            app_name=settings.app_name,
            debug=settings.debug,
            log_level=settings.log_level,
            feeds=len(settings.feed_urls),
        )
        if news_service is not None:
            yield
        else:
            async with httpx.AsyncClient(
                timeout=settings.http_timeout_seconds,
                follow_redirects=True,
                headers={"User-Agent": settings.user_agent},
            ) as http_client:
                application.state.news_service = build_news_service(settings, http_client)
                yield
        logger.info("application_shutdown")

    application = FastAPI(
        title=settings.app_name,
        description="Aggregates gaming news feeds and serves enriched summaries.",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    if news_service is not None:
        application.state.news_service = news_service

    # ---- Middleware --------------------------------------------------------

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @application.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: Callable
    ) -> Response:
        """Log every request with its status and duration under a request ID."""
        request_id = str(uuid.uuid4())
        request_id_var.set(request_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as exc:
            logger.error("unhandled_exception", exc_info=exc)
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            log_fn = logger.warning if status_code >= 400 else logger.info
            log_fn("request_complete", status_code=status_code, elapsed_ms=elapsed_ms)

        response.headers["X-Request-ID"] = request_id
        return response

    # ---- Error handlers ----------------------------------------------------

    @application.exception_handler(PipelineRunError)
    async def pipeline_run_error_handler(
        request: Request, exc: PipelineRunError
    ) -> JSONResponse:
        cause = exc.__cause__ or exc
        body = ErrorPayload(error=str(exc), message=str(cause) or type(cause).__name__)
        return JSONResponse(body.model_dump(), status_code=500)

    # ---- Routers -----------------------------------------------------------

    from news_enricher.api.routes import health, news  # noqa: PLC0415

    application.include_router(health.router)
    application.include_router(news.router)

    return application


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

app = create_app()
"""The FastAPI application instance passed to Uvicorn."""
