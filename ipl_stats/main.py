import logging
import time
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api import analytics, cache, health, matches, players, weather
from .schemas.error import ErrorType, ValidationErrorDetail
from .services.container import GatewayServices, build_services
from .settings import APP_VERSION, AppSettings, get_settings
from .utils.error_responses import (
    build_error_response,
    build_validation_error_response,
    error_type_for_status,
)
from .utils.request_context import get_request_id, set_request_id

# Configure logging
logging.basicConfig(
    level=get_settings().log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment(settings: AppSettings) -> None:
    """Log warnings for unset optional configuration."""
    warnings = settings.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def _log_preflight(settings: AppSettings) -> None:
    logger.info("=" * 60)
    logger.info("IPL Stats API - Configuration Preflight Check")
    logger.info("=" * 60)
    logger.info(f"Environment: {settings.app_env}")
    logger.info(f"API prefix: {settings.normalized_api_prefix or '/'}")
    logger.info(
        "Weather API: %s", "configured" if settings.weather_configured else "missing"
    )
    logger.info(
        "Cricket API: %s", "configured" if settings.cricket_configured else "missing"
    )
    logger.info(
        "Cache TTLs: players=%.0fs matches=%.0fs weather=%.0fs",
        settings.players_cache_ttl_seconds,
        settings.matches_cache_ttl_seconds,
        settings.weather_cache_ttl_seconds,
    )
    logger.info("Roster sources: %s", ", ".join(settings.players_data_path_list))
    logger.info("=" * 60)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    services: GatewayServices = app.state.services
    settings = services.settings

    validate_environment(settings)
    _log_preflight(settings)

    from ipl_stats.warmup import warmup_all

    await warmup_all(services)

    yield

    logger.info("Shutting down IPL Stats API")
    await services.aclose()


def _json_error(status_code: int, payload) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=payload.model_dump(mode="json"),
    )


def _validation_details(errors) -> list[ValidationErrorDetail]:
    return [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in errors
    ]


def register_exception_handlers(app: FastAPI, settings: AppSettings) -> None:
    """Render every failure as the structured error envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle explicit HTTP errors and unmatched routes."""
        path = str(request.url.path)
        unmatched = request.scope.get("endpoint") is None
        if exc.status_code == status.HTTP_404_NOT_FOUND and unmatched:
            message = f"API endpoint {path} not found"
        else:
            message = str(exc.detail)

        logger.info(
            "HTTP %s for request %s to %s: %s",
            exc.status_code,
            get_request_id(),
            path,
            message,
        )

        error_response = build_error_response(
            error_type=error_type_for_status(exc.status_code),
            message=message,
            status_code=exc.status_code,
            path=path,
        )
        response = _json_error(exc.status_code, error_response)
        if exc.headers:
            response.headers.update(exc.headers)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle FastAPI request validation errors."""
        errors = _validation_details(exc.errors())

        logger.warning(
            "Validation error for request %s to %s: %s errors",
            get_request_id(),
            request.url.path,
            len(errors),
        )

        error_response = build_validation_error_response(
            message="Request validation failed",
            error=f"{len(errors)} validation error(s)",
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            path=str(request.url.path),
            errors=errors,
        )
        return _json_error(status.HTTP_422_UNPROCESSABLE_ENTITY, error_response)

    @app.exception_handler(ValidationError)
    async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
        """Handle Pydantic validation errors raised while building responses."""
        logger.error(
            "Data validation error for request %s to %s: %s errors",
            get_request_id(),
            request.url.path,
            exc.error_count(),
        )

        error_response = build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="Data validation failed",
            error=str(exc) if settings.is_development else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=str(request.url.path),
        )
        return _json_error(status.HTTP_500_INTERNAL_SERVER_ERROR, error_response)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle all other unhandled exceptions."""
        logger.exception(
            "Unhandled exception for request %s to %s: %s",
            get_request_id(),
            request.url.path,
            type(exc).__name__,
        )

        error_response = build_error_response(
            error_type=ErrorType.INTERNAL_ERROR,
            message="Internal server error",
            error=str(exc) if settings.is_development else None,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            path=str(request.url.path),
        )
        return _json_error(status.HTTP_500_INTERNAL_SERVER_ERROR, error_response)


def create_app(
    settings: AppSettings | None = None,
    services: GatewayServices | None = None,
) -> FastAPI:
    """Build the FastAPI application around a services container.

    When ``services`` is omitted a fresh container is built from ``settings``;
    the application owns it and closes it on shutdown.
    """
    if settings is None:
        settings = services.settings if services is not None else get_settings()
    if services is None:
        services = build_services(settings)

    app = FastAPI(
        title="IPL Stats API",
        version=APP_VERSION,
        description=(
            "Gateway serving IPL player statistics, live T20 matches and venue "
            "weather with in-memory caching and synthesized fallbacks."
        ),
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.services = services

    allow_origins = settings.cors_allow_origins
    logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        # Browsers reject credentialed requests against a wildcard origin.
        allow_credentials="*" not in allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        """Add unique request ID to each request for tracking."""
        request_id = str(uuid.uuid4())
        set_request_id(request_id)
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "%s %s -> %s (%.1fms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    register_exception_handlers(app, settings)

    prefix = settings.normalized_api_prefix
    app.include_router(health.router, prefix=prefix, tags=["system"])
    app.include_router(players.router, prefix=prefix, tags=["players"])
    app.include_router(matches.router, prefix=prefix, tags=["matches"])
    app.include_router(weather.router, prefix=prefix, tags=["weather"])
    app.include_router(analytics.router, prefix=prefix, tags=["analytics"])
    app.include_router(cache.router, prefix=prefix, tags=["cache"])

    return app


app = create_app()
