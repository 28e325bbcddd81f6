"""
API routes for checkout and payment processing.
"""
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from summit_checkout.core.catalog import EventCatalog
from summit_checkout.core.exceptions import (
    AmountValidationError,
    EventNotFoundError,
    PaymentValidationError,
)
from summit_checkout.core.models import ChargeResult, PaymentRequest
from summit_checkout.core.payment_processor import PaymentProcessor
from summit_checkout.core.pricing import resolve_amount, to_minor_units
from summit_checkout.core.remote_config import RemoteConfigCache
from summit_checkout.integrations.error_taxonomy import ErrorCategory
from summit_checkout.integrations.remote_json import RemoteResourceError
from summit_checkout.monitoring.health import HealthCheck
from summit_checkout.monitoring.metrics import metrics

from .schemas import (
    ChargeResponse,
    ErrorResponse,
    EventDetailResponse,
    EventListResponse,
    HealthCheckResponse,
)

logger = structlog.get_logger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

# Create routers
checkout_router = APIRouter(tags=["checkout"])
payment_router = APIRouter(tags=["payments"])
events_router = APIRouter(prefix="/api/events", tags=["events"])
monitoring_router = APIRouter(tags=["monitoring"])


def get_config_cache(request: Request) -> RemoteConfigCache:
    return request.app.state.config_cache


def get_catalog(request: Request) -> EventCatalog:
    return request.app.state.catalog


def get_processor(request: Request) -> PaymentProcessor:
    return request.app.state.payment_processor


def get_health_check(request: Request) -> HealthCheck:
    return request.app.state.health_check


def render_error_page(
    request: Request,
    status_code: int,
    title: str,
    message: str,
    back_url: str,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"title": title, "message": message, "back_url": back_url, "status_code": status_code},
        status_code=status_code,
    )


@checkout_router.get("/", include_in_schema=False)
async def home(config_cache: RemoteConfigCache = Depends(get_config_cache)) -> RedirectResponse:
    """Send visitors to the public summit site."""
    return RedirectResponse(await config_cache.get_redirect_url(), status_code=status.HTTP_302_FOUND)


@checkout_router.get(
    "/payment/{event_id}",
    response_class=HTMLResponse,
    summary="Checkout page",
    description="Render the checkout page for an event, optionally with an override amount",
)
async def checkout(
    request: Request,
    event_id: str,
    pay: Optional[str] = None,
    catalog: EventCatalog = Depends(get_catalog),
    config_cache: RemoteConfigCache = Depends(get_config_cache),
) -> HTMLResponse:
    """
    Render checkout for an event.

    The `pay` query parameter overrides the catalog price and must be a
    number between 1 and 10000.
    """
    back_url = await config_cache.get_redirect_url()

    try:
        event = await catalog.resolve_event(event_id)
    except RemoteResourceError as e:
        logger.error("checkout_catalog_unavailable", event_id=event_id, error=str(e))
        return render_error_page(
            request,
            status.HTTP_502_BAD_GATEWAY,
            "Registration Unavailable",
            "Conference details could not be loaded. Please try again shortly.",
            back_url,
        )

    if event is None:
        return render_error_page(
            request,
            status.HTTP_404_NOT_FOUND,
            "Conference Not Found",
            "The requested conference event was not found.",
            back_url,
        )

    try:
        amount = resolve_amount(event, pay)
    except AmountValidationError as e:
        metrics.record_amount_rejection(e.category.value)
        logger.warning(
            "checkout_amount_rejected",
            event_id=event_id,
            category=e.category.value,
            override=pay,
        )
        return render_error_page(
            request,
            status.HTTP_400_BAD_REQUEST,
            "Invalid Payment Amount",
            e.message,
            back_url,
        )

    if pay:
        logger.info("checkout_custom_amount", event_id=event_id, amount=str(amount))

    return templates.TemplateResponse(
        request,
        "checkout.html",
        {
            "event": event,
            "amount_display": f"{amount:,.2f}",
            "amount_minor_units": to_minor_units(amount),
            "publishable_key": await config_cache.get_publishable_key(),
            "back_url": back_url,
        },
    )


@checkout_router.get("/success", response_class=HTMLResponse, include_in_schema=False)
async def success(
    request: Request,
    config_cache: RemoteConfigCache = Depends(get_config_cache),
) -> HTMLResponse:
    """Confirmation page shown after a successful charge."""
    return templates.TemplateResponse(
        request, "success.html", {"back_url": await config_cache.get_redirect_url()}
    )


@payment_router.post(
    "/process-payment",
    response_model=ChargeResponse,
    summary="Charge a card",
    description="Validate a registration payment and charge it through Stripe",
    responses={404: {"model": ChargeResponse}, 502: {"model": ChargeResponse}},
)
async def process_payment(
    payment: PaymentRequest,
    processor: PaymentProcessor = Depends(get_processor),
) -> JSONResponse:
    """Charge a card for an event registration."""
    logger.info(
        "api_process_payment_request",
        event_id=payment.event_id,
        amount=payment.amount_minor_units,
    )

    try:
        result = await processor.submit_charge(payment)

    except PaymentValidationError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=ChargeResult.failure(e.category.value, e.message).to_response(),
        )

    except EventNotFoundError as e:
        logger.warning("api_process_payment_event_not_found", event_id=e.event_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ChargeResult.failure(e.category.value, e.message).to_response(),
        )

    except RemoteResourceError as e:
        logger.error("api_process_payment_catalog_unavailable", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content=ChargeResult.failure(
                ErrorCategory.CATALOG_UNAVAILABLE.value,
                "Unable to fetch conference events",
            ).to_response(),
        )

    return JSONResponse(
        status_code=status.HTTP_200_OK if result.success else status.HTTP_400_BAD_REQUEST,
        content=result.to_response(),
    )


@events_router.get(
    "",
    response_model=EventListResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List events",
)
async def list_events(catalog: EventCatalog = Depends(get_catalog)) -> Any:
    """List every event in the catalog."""
    try:
        events = await catalog.list_events()
    except RemoteResourceError as e:
        logger.error("api_list_events_error", error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Unable to fetch conference events"},
        )

    return {"success": True, "events": events, "total": len(events)}


@events_router.get(
    "/{event_id}",
    response_model=EventDetailResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="Get event",
)
async def get_event(event_id: str, catalog: EventCatalog = Depends(get_catalog)) -> Any:
    """Get a single event by id."""
    try:
        event = await catalog.resolve_event(event_id)
    except RemoteResourceError as e:
        logger.error("api_get_event_error", event_id=event_id, error=str(e))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Unable to fetch conference details"},
        )

    if event is None:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"success": False, "error": "Conference event not found"},
        )

    return {"success": True, "event": event}


@monitoring_router.get(
    "/api/health",
    response_model=HealthCheckResponse,
    summary="Health check",
)
async def health(health_check: HealthCheck = Depends(get_health_check)) -> Dict[str, Any]:
    """Health check endpoint for monitoring."""
    return await health_check.check_all()


@monitoring_router.get(
    "/metrics",
    summary="Prometheus metrics",
    include_in_schema=False,
)
async def prometheus_metrics() -> Response:
    """Expose Prometheus metrics."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
