"""
Application factory.

Builds the FastAPI app from an explicit Settings instance. Settings and the
completion client live on ``app.state`` for the lifetime of the process.
"""
import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from explain_relay import __version__
from explain_relay.api.endpoints import health
from explain_relay.api.models import HealthStatus
from explain_relay.api.routers import api_router
from explain_relay.config.settings import Settings
from explain_relay.exceptions import ConfigurationError, RelayError
from explain_relay.middleware.error_handling import ErrorHandlingMiddleware
from explain_relay.middleware.request_limits import BodySizeLimitMiddleware, RateLimitMiddleware
from explain_relay.middleware.request_logging import RequestLoggingMiddleware
from explain_relay.middleware.security_headers import SecurityHeadersMiddleware
from explain_relay.services.completion_client import CompletionClient
from explain_relay.utils.rate_limiter import FixedWindowRateLimiter

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan context manager."""
    settings: Settings = app.state.settings
    logger.info(
        f"Starting {settings.app_name} (model={settings.llm_model}, "
        f"base_url={settings.llm_base_url}, api_key_loaded={settings.has_api_key})"
    )

    yield

    logger.info("Shutting down...")
    await app.state.completion_client.aclose()


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    content = {"error": exc.message}
    if exc.details is not None:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # A known path with the wrong method is still an unmatched route
    if exc.status_code in (status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"error": "Route not found"},
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    details = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg")}
        for error in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request body", "details": details},
    )


def create_app(
    settings: Settings,
    completion_client: Optional[CompletionClient] = None,
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings loaded once at process start
        completion_client: Upstream client; built from settings when omitted

    Raises:
        ConfigurationError: If no upstream API key is configured
    """
    if not settings.has_api_key:
        raise ConfigurationError(
            "No API key found in environment variables "
            "(set NEBIUS_API_KEY, LLM_API_KEY or API_KEY)"
        )

    app = FastAPI(
        title=settings.app_name,
        description="Relays code snippets to a chat-completions provider for explanation",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )

    app.state.settings = settings
    app.state.started_at = time.monotonic()
    app.state.completion_client = completion_client or CompletionClient(settings)

    # Innermost first: the last middleware added wraps all the others
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)
    app.add_middleware(
        RateLimitMiddleware,
        limiter=FixedWindowRateLimiter(
            max_requests=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        ),
        trust_proxy_headers=settings.trust_proxy_headers,
    )
    # Error responses still get hardening and CORS headers
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    if settings.enable_request_logging:
        app.add_middleware(
            RequestLoggingMiddleware,
            trust_proxy_headers=settings.trust_proxy_headers,
        )

    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    app.include_router(api_router, prefix="/api")
    app.add_api_route(
        "/",
        health.health_check,
        methods=["GET"],
        response_model=HealthStatus,
        tags=["health"],
    )

    return app
