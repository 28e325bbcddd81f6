"""
Main FastAPI application.

Checkout API for conference registrations with:
- Remote config loaded once at startup
- CORS configuration
- Error handling
- Request ID tracking
- Structured logging
- Prometheus metrics
"""
import time
import uuid
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Optional

import structlog
import uvicorn
from fastapi import FastAPI, Request, Response, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from summit_checkout.config import Settings, get_settings
from summit_checkout.core.catalog import EventCatalog
from summit_checkout.core.payment_processor import PaymentProcessor
from summit_checkout.core.remote_config import RemoteConfigCache
from summit_checkout.integrations.remote_json import RemoteJSONFetcher
from summit_checkout.integrations.stripe_client import (
    GatewayConfigurationError,
    ProcessorCredentials,
    StripeGateway,
)
from summit_checkout.monitoring.health import HealthCheck
from summit_checkout.monitoring.logging import setup_logging

from .routes import (
    checkout_router,
    events_router,
    monitoring_router,
    payment_router,
    render_error_page,
)

logger = structlog.get_logger(__name__)

GatewayFactory = Callable[[ProcessorCredentials, Settings], StripeGateway]


def default_gateway_factory(credentials: ProcessorCredentials, settings: Settings) -> StripeGateway:
    return StripeGateway(credentials, api_version=settings.stripe_api_version)


def create_app(
    settings: Optional[Settings] = None,
    fetcher: Optional[RemoteJSONFetcher] = None,
    gateway_factory: GatewayFactory = default_gateway_factory,
) -> FastAPI:
    """
    Build the checkout application.

    Args:
        settings: Settings to use (environment settings if omitted)
        fetcher: Remote JSON fetcher shared by config and catalog
        gateway_factory: Builds the Stripe gateway from resolved credentials

    Returns:
        FastAPI: Configured application
    """
    settings = settings or get_settings()
    fetcher = fetcher or RemoteJSONFetcher(timeout=settings.remote_fetch_timeout_seconds)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, Any]:
        """
        Application lifespan manager.

        Loads the remote config and builds the service graph. Failing to
        build the Stripe gateway aborts startup.
        """
        logger.info("application_startup", app_name=settings.app_name, env=settings.app_env)

        config_cache = RemoteConfigCache(settings, fetcher)
        await config_cache.get_config()
        credentials = await config_cache.resolve_credentials()

        try:
            gateway = gateway_factory(credentials, settings)
        except GatewayConfigurationError as e:
            logger.critical("stripe_gateway_initialization_failed", error=str(e))
            raise

        catalog = EventCatalog(config_cache, fetcher)

        app.state.settings = settings
        app.state.config_cache = config_cache
        app.state.catalog = catalog
        app.state.payment_processor = PaymentProcessor(settings, catalog, gateway)
        app.state.health_check = HealthCheck(settings, config_cache)

        logger.info(
            "application_ready",
            config_source="remote" if config_cache.loaded_from_remote else "fallback",
            events_url=await config_cache.get_events_url(),
            test_mode=credentials.is_test_mode,
        )

        yield

        logger.info("application_shutdown")

    app = FastAPI(
        title="Research Summits Checkout",
        description=(
            "Checkout and payment API for Research Summits conference registrations. "
            "Resolves events and prices from the remote catalog and charges cards "
            "through Stripe."
        ),
        version=settings.app_version,
        lifespan=lifespan,
        debug=settings.debug,
        docs_url=None if settings.is_production else "/docs",
        redoc_url=None if settings.is_production else "/redoc",
        openapi_url=None if settings.is_production else "/openapi.json",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_allowed_origins_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id_middleware(request: Request, call_next: Any) -> Response:
        """
        Add request ID to all requests for tracing.

        Also adds timing information and structured logging context.
        """
        request_id = str(uuid.uuid4())
        start_time = time.time()

        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id

            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_seconds=time.time() - start_time,
            )

            return response

        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                duration_seconds=time.time() - start_time,
            )
            raise

        finally:
            structlog.contextvars.clear_contextvars()

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Global exception handler for unhandled exceptions."""
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error"},
        )

    @app.exception_handler(StarletteHTTPException)
    async def not_found_handler(request: Request, exc: StarletteHTTPException) -> Response:
        """Render unknown paths as an HTML page; other HTTP errors keep the JSON body."""
        if exc.status_code != status.HTTP_404_NOT_FOUND:
            return await http_exception_handler(request, exc)

        config_cache = getattr(request.app.state, "config_cache", None)
        if config_cache is not None:
            back_url = await config_cache.get_redirect_url()
        else:
            back_url = settings.default_redirect_url

        logger.info("page_not_found", path=request.url.path)
        return render_error_page(
            request,
            status.HTTP_404_NOT_FOUND,
            "Page Not Found",
            "The page you are looking for does not exist.",
            back_url,
        )

    app.include_router(checkout_router)
    app.include_router(payment_router)
    app.include_router(events_router)
    app.include_router(monitoring_router)

    return app


def main() -> None:
    """Console entry point."""
    settings = get_settings()
    setup_logging(settings)

    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
