"""FastAPI application entry point."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from workforce_api.config import Settings, get_settings
from workforce_api.context import AppContext, build_context
from workforce_api.exceptions import WorkforceAPIError
from workforce_api.middleware.error_handler import (
    generic_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    workforce_exception_handler,
)
from workforce_api.middleware.request_logging import RequestLoggingMiddleware
from workforce_api.routers import dashboard, employees, invoices, projects, session, workspace

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # Workspace and dashboard data is per identity
        if "Cache-Control" not in response.headers:
            response.headers["Cache-Control"] = "no-store, max-age=0"
        return response


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    context: AppContext = app.state.context
    logger.info(
        "%s starting (%s, store backend %s)",
        context.settings.app_name,
        context.settings.environment,
        context.settings.store_backend,
    )
    yield
    # Close the store's HTTP client to release connections
    await context.close()


def _allowed_origins(config: Settings) -> list[str]:
    """Validate configured CORS origins.

    Raises:
        ValueError: On wildcard origins, which are incompatible with credentials
    """
    allowed_origins = []
    for origin in config.cors_origins_list:
        if origin == "*":
            raise ValueError(
                "CORS_ORIGINS cannot contain '*' wildcard when allow_credentials=True. "
                "Specify explicit origins."
            )
        # Must be scheme://host[:port]
        if origin.startswith("http://") or origin.startswith("https://"):
            allowed_origins.append(origin)
    return allowed_origins


def create_app(settings: Settings | None = None, context: AppContext | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use instead of the environment
        context: Prebuilt application context (e.g. with a seeded store)

    Returns:
        Configured FastAPI application
    """
    config = context.settings if context is not None else settings or get_settings()
    logging.getLogger().setLevel(config.log_level)

    app = FastAPI(
        title=config.app_name,
        version="0.1.0",
        description="Workforce, project and finance management API",
        lifespan=lifespan,
        docs_url="/docs" if config.debug else None,
        redoc_url="/redoc" if config.debug else None,
    )
    app.state.context = context if context is not None else build_context(config)

    # Security: Sanitized error handlers to prevent information disclosure
    app.add_exception_handler(WorkforceAPIError, workforce_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # FastAPI processes middleware in REVERSE order of addition
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(config),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "X-Requested-With", "X-Request-ID"],
    )

    # Include routers
    app.include_router(session.router, prefix="/api/v1/session", tags=["Session"])
    app.include_router(dashboard.router, prefix="/api/v1/dashboard", tags=["Dashboard"])
    app.include_router(workspace.router, prefix="/api/v1/workspace", tags=["Workspace"])
    app.include_router(employees.router, prefix="/api/v1/employees", tags=["Employees"])
    app.include_router(projects.router, prefix="/api/v1/projects", tags=["Projects"])
    app.include_router(invoices.router, prefix="/api/v1/invoices", tags=["Invoices"])

    @app.get("/api/v1/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app


app = create_app()
