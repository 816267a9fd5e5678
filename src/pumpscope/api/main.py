"""FastAPI application factory and entry point.

Usage::

    # Development server (from project root)
    uvicorn pumpscope.api.main:app --reload

    # Production
    gunicorn pumpscope.api.main:app -k uvicorn.workers.UvicornWorker
"""

from __future__ import annotations

import time
import uuid
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Callable, Optional

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from pumpscope.api.dependencies import build_services
from pumpscope.api.routes import health as health_routes
from pumpscope.api.routes import pump as pump_routes
from pumpscope.config.settings import get_settings
from pumpscope.core.logging_config import configure_logging, request_id_var

# Applied at import time so records emitted while the app is built are
# captured.  create_app() re-applies it with the configured level.
configure_logging("INFO")

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Build the process-wide services on startup and close them on shutdown."""
    settings = get_settings()
    services = build_services(settings)
    application.state.services = services
    logger.info(
        "services_started",
        aggregator_base_url=settings.aggregator_base_url,
        scrape_base_url=settings.scrape_base_url,
        batch_size=settings.scrape_batch_size,
        enrichment_timeout=settings.enrichment_timeout,
    )
    try:
        yield
    finally:
        await services.aclose()
        logger.info("services_stopped")


def create_app() -> FastAPI:
    """Build and configure the FastAPI application.

    Kept separate from the module-level ``app`` so tests can build an
    instance after patching the environment.
    """
    settings = get_settings()
    configure_logging(settings.log_level)

    application = FastAPI(
        title=settings.app_name,
        description=(
            "Trending token list with descriptions scraped from public token "
            "pages where the upstream aggregator has none."
        ),
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )

    # ---- Middleware --------------------------------------------------------

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["GET", "DELETE"],
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
        response: Optional[Response] = None
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error("unhandled_exception", exc_info=exc)
            raise
        finally:
            elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
            status_code = getattr(response, "status_code", 500)
            log_fn = logger.warning if status_code >= 400 else logger.info
            log_fn("request_complete", status_code=status_code, elapsed_ms=elapsed_ms)

        response.headers["X-Request-ID"] = request_id
        return response

    # ---- Routers -----------------------------------------------------------

    application.include_router(health_routes.router)
    application.include_router(pump_routes.router)

    return application


app = create_app()
