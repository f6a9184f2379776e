"""FastAPI application for the avatar reward API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from pathlib import Path
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from prometheus_client import CollectorRegistry
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.base import BaseHTTPMiddleware

from avatarapi import __version__
from avatarapi.config import AppConfig, get_config
from avatarapi.core.logging import configure_logging
from avatarapi.errors import InvalidInput, PersistenceFailure
from avatarapi.startup_validation import run_all_validations
from avatarapi.store.repository import ConfigStore
from avatarapi.web.routes import health, items, settings, slots

logger = structlog.get_logger()


# Request Logging Middleware
class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        structlog.contextvars.clear_contextvars()

        request_id = request.headers.get("X-Request-ID", str(uuid4()))
        structlog.contextvars.bind_contextvars(request_id=request_id)

        logger.info(
            "request_started",
            method=request.method,
            path=request.url.path,
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)

            logger.info(
                "request_completed",
                status_code=response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as exc:
            logger.error("request_failed", error=str(exc))
            raise


@asynccontextmanager
async def lifespan(app: FastAPI):
    # StartupValidationError propagates and aborts startup
    run_all_validations(app.state.config, app.state.store)
    yield


# Exception Handlers
async def invalid_input_handler(request: Request, exc: InvalidInput):
    return JSONResponse(status_code=400, content={"error": str(exc)})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and query strings are InvalidInput (400), not 422."""
    errors = exc.errors()
    if any(error.get("type") == "missing" for error in errors):
        message = "Missing parameters"
    else:
        message = "Malformed request"
    return JSONResponse(
        status_code=400,
        content={"error": message, "details": jsonable_encoder(errors)},
    )


async def persistence_failure_handler(request: Request, exc: PersistenceFailure):
    logger.error("teacher_settings_save_failed", error=str(exc))
    return JSONResponse(status_code=500, content={"error": "Failed to persist settings"})


def create_app(config: AppConfig | None = None, store: ConfigStore | None = None) -> FastAPI:
    """Build the application.

    Args:
        config: Defaults to the environment-derived singleton
        store: Defaults to a ConfigStore at `config.store.path`

    Returns:
        FastAPI app whose lifespan validates and loads the store
    """
    config = config or get_config()
    store = store or ConfigStore(config.store.path)

    configure_logging(config.log_level, config.json_logs)

    app = FastAPI(
        title="Avatar Reward API",
        description="Teacher item catalogs and badge-unlocked avatar slots",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store

    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Prometheus Metrics
    if config.server.enable_metrics:
        Instrumentator(registry=CollectorRegistry()).instrument(app).expose(app)

    # Mount item images if directory exists
    static_dir = Path(config.server.static_dir)
    if static_dir.is_dir():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    app.add_exception_handler(InvalidInput, invalid_input_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(PersistenceFailure, persistence_failure_handler)

    # Include Routers
    app.include_router(health.router)
    app.include_router(settings.router)
    app.include_router(items.router)
    app.include_router(slots.router)

    return app
