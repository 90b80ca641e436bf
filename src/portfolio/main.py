import sys
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from prometheus_fastapi_instrumentator import Instrumentator
from pydantic import ValidationError as SettingsValidationError
from starlette.middleware.base import RequestResponseEndpoint

from src.portfolio.api.router import api_router
from src.portfolio.core.config import Settings, get_settings
from src.portfolio.core.context import AppContext
from src.portfolio.core.exceptions import setup_exception_handlers
from src.portfolio.core.health import setup_health_endpoint
from src.portfolio.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.portfolio.core.migrations import run_migrations_async

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - build the shared context, then tear it down."""
    settings: Settings = app.state.settings
    setup_logging(settings.debug, service=settings.app_name)
    logger.info(f"Starting {settings.app_name}")

    if settings.run_migrations_on_startup:
        logger.info("Running database migrations...")
        await run_migrations_async()

    # Tests may install a prebuilt context before startup
    context: AppContext | None = getattr(app.state, "context", None)
    if context is None:
        context = AppContext.from_settings(settings)
    await context.startup()
    app.state.context = context

    yield

    logger.info("Closing connections...")
    await context.shutdown()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "projects", "description": "Portfolio project management"},
    {"name": "register", "description": "Admin account listing"},
]


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Project portfolio API with image uploads",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings

    setup_exception_handlers(app)

    # Add correlation ID middleware first (outermost middleware)
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", "X-Request-ID"],
        expose_headers=["X-Request-ID"],
    )

    @app.middleware("http")
    async def logging_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context for all requests."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        try:
            response = await call_next(request)
            return response
        finally:
            clear_request_context()

    app.include_router(api_router)
    setup_health_endpoint(app)

    if settings.media_backend == "local":
        # Directory is created by the media store during startup
        app.mount(
            settings.media_url_prefix,
            StaticFiles(directory=settings.media_root, check_dir=False),
            name="uploads",
        )

    if settings.enable_metrics:
        Instrumentator().instrument(app).expose(app, endpoint="/metrics", include_in_schema=False)

    return app


def run() -> None:
    """Start the API server. Invalid configuration is fatal."""
    try:
        settings = get_settings()
    except SettingsValidationError as e:
        setup_logging()
        logger.critical(
            "Invalid configuration, refusing to start",
            errors=[
                {"field": ".".join(str(p) for p in err["loc"]), "msg": err["msg"]}
                for err in e.errors()
            ],
        )
        sys.exit(1)

    setup_logging(settings.debug, service=settings.app_name)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
