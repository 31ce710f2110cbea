"""
Main FastAPI application for the system prompts API.

Sets up the application with all routes, middleware, and startup/shutdown logic.
Run with ``fastapi run src/system_prompts/main.py`` (requires ``API_SECRET_KEY``).
"""

import sys
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded

from system_prompts.api.health import router as health_router
from system_prompts.api.limiter import get_limiter_status, limiter
from system_prompts.api.v1.system_prompts import router as system_prompts_router
from system_prompts.config import Settings
from system_prompts.middleware.request_size import request_size_validator
from system_prompts.middleware.security_headers import security_headers_middleware
from system_prompts.store.manager import SystemPromptManager
from system_prompts.utils.errors import ConfigurationError, SystemPromptError
from system_prompts.utils.logging import get_logger, setup_logging
from system_prompts.utils.request_context import set_request_id

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):  # type: ignore
    """
    Manage application lifecycle.

    Initializes the prompt store on startup so the config directory and the
    built-in prompts exist before the first request.

    Args:
        app: FastAPI application instance

    Yields:
        Control during application runtime
    """
    logger.info("Application starting up")
    manager: SystemPromptManager = app.state.prompt_manager
    try:
        seeded = manager.initialize()
        logger.info(
            "Prompt store initialized",
            extra={"path": str(manager.prompts_file), "seeded": seeded},
        )
        logger.info(
            "Rate limiter initialized with status",
            extra={"component": "rate_limiter", **get_limiter_status()},
        )
    except SystemPromptError as exc:
        logger.critical(
            "Failed to initialize prompt store - application cannot start",
            extra={"error": exc.message, "error_type": type(exc).__name__},
        )
        raise

    yield

    logger.info("Application shutting down")


def create_app(
    settings: Settings | None = None,
    manager: SystemPromptManager | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (loaded from the environment when omitted)
        manager: Prompt manager to serve (built from settings when omitted)

    Returns:
        Configured FastAPI application instance

    Raises:
        ConfigurationError: If no API secret key is configured
    """
    if settings is None:
        try:
            settings = Settings()
        except Exception as exc:
            # Cannot use logger yet - settings failed to load
            print(f"CRITICAL: Failed to load settings: {exc}", file=sys.stderr)
            raise

    setup_logging(settings)

    if not settings.api_secret_key:
        logger.critical(
            "Configuration validation failed: API_SECRET_KEY is required",
            extra={"validation_field": "api_secret_key"},
        )
        raise ConfigurationError("API_SECRET_KEY is required", error_code="MISSING_SECRET_KEY")

    logger.info(
        "Creating FastAPI application",
        extra={
            "environment": settings.environment,
            "api_title": settings.api_title,
        },
    )

    app = FastAPI(
        title=settings.api_title,
        version=settings.api_version,
        description="Management API for named, tagged system prompts",
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.prompt_manager = manager or SystemPromptManager.from_settings(settings)
    app.state.limiter = limiter

    # Added first, executes last
    @app.middleware("http")
    async def add_request_tracking(request: Request, call_next):  # type: ignore
        """Tag each request with an ID and log its timing."""
        request_id = request.headers.get("X-Request-ID", "").strip()
        if not request_id:
            request_id = f"req_{int(time.time() * 1000)}"

        set_request_id(request_id)
        start_time = time.time()

        response = await call_next(request)

        response_time = time.time() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Response-Time"] = str(response_time)
        logger.info(
            "Response completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time": response_time,
            },
        )
        return response

    app.middleware("http")(request_size_validator)

    if settings.enable_security_headers:
        app.middleware("http")(security_headers_middleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    @app.exception_handler(SystemPromptError)
    async def system_prompt_error_handler(request: Request, exc: SystemPromptError) -> JSONResponse:
        """Map store errors to their HTTP status codes."""
        log_fn = logger.warning if exc.status_code < 500 else logger.error
        log_fn(
            f"System prompt error: {exc.message}",
            extra={
                "error_code": exc.error_code,
                "status_code": exc.status_code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.error_code,
                "message": exc.message,
            },
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
        """Return HTTP 429 with a Retry-After header."""
        logger.warning(
            "Rate limit exceeded",
            extra={
                "client": request.client.host if request.client else "unknown",
                "path": str(request.url.path),
                "method": request.method,
                "limit": str(exc.detail),
            },
        )
        return JSONResponse(
            status_code=429,
            headers={"Retry-After": "60"},
            content={"detail": str(exc.detail)},
        )

    app.include_router(health_router)
    app.include_router(system_prompts_router)

    logger.info("FastAPI application created successfully")

    return app


# Create the application instance for running with FastAPI CLI
app = create_app()
