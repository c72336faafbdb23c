from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import RequestResponseEndpoint

from src.crudwizard.api.v1.router import api_router
from src.crudwizard.core.config import Settings, get_settings
from src.crudwizard.core.db import initialize_database
from src.crudwizard.core.exceptions import setup_exception_handlers
from src.crudwizard.core.health import setup_health_endpoint
from src.crudwizard.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - initialize the database, dispose it on shutdown.

    DatabaseConnectionError propagates and aborts startup.
    """
    settings: Settings = app.state.settings
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    app.state.database = await initialize_database(settings)

    yield

    logger.info("Closing connections...")
    await app.state.database.dispose()
    app.state.database = None
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "auth", "description": "Auth token issue and revocation"},
    {"name": "users", "description": "User registration and profile"},
    {"name": "projects", "description": "Project management"},
]


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="CRUD Wizard API",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = None

    setup_exception_handlers(app)

    # Outermost middleware
    app.add_middleware(CorrelationIdMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
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

    return app
