"""
Charge submission for conference registrations.

Orchestrates the payment flow:
1. Validate required fields and the minimum charge
2. Re-resolve the event from the catalog
3. Create the Stripe charge
4. Classify the outcome into a ChargeResult
"""
import math
from datetime import datetime, timezone
from typing import Any, Dict

import structlog

from summit_checkout.config import Settings
from summit_checkout.integrations.error_taxonomy import (
    ErrorCategory,
    classify_processor_error,
)
from summit_checkout.integrations.stripe_client import ProcessorError, StripeGateway
from summit_checkout.monitoring.metrics import metrics

from .catalog import EventCatalog
from .exceptions import (
    AmountTooLargeError,
    AmountTooSmallError,
    EventNotFoundError,
    InvalidChargeAmountError,
    MissingFieldsError,
    PaymentValidationError,
)
from .models import ChargeResult, EventRecord, PaymentRequest
from .pricing import round_half_up

logger = structlog.get_logger(__name__)

MIN_CHARGE_MINOR_UNITS = 50  # Stripe minimum for USD
MAX_CHARGE_MINOR_UNITS = 99_999_999  # Stripe maximum for USD
REQUIRED_FIELDS = (
    "token",
    "event_id",
    "customer_name",
    "customer_email",
    "customer_phone",
    "amount_minor_units",
)
NOT_SUCCESSFUL_MESSAGE = "Payment was not successful"


class PaymentProcessor:
    """
    Submits registration charges and normalizes their outcome.

    Local validation failures raise PaymentValidationError subclasses or
    EventNotFoundError before Stripe is called. Anything that goes wrong
    inside the gateway is returned as a failed ChargeResult.
    """

    def __init__(self, settings: Settings, catalog: EventCatalog, gateway: StripeGateway):
        """
        Initialize payment processor.

        Args:
            settings: Currency and statement descriptor
            catalog: Event catalog for the charge-time lookup
            gateway: Stripe gateway
        """
        self.settings = settings
        self.catalog = catalog
        self.gateway = gateway

        logger.info("payment_processor_initialized", currency=settings.currency)

    @staticmethod
    def _validate_payment_request(request: PaymentRequest) -> int:
        """
        Validate a payment request.

        Args:
            request: Incoming payment request

        Returns:
            int: Amount in cents, rounded to an integer

        Raises:
            MissingFieldsError: If a required field is absent or blank
            InvalidChargeAmountError: If the amount is NaN or infinite
            AmountTooSmallError: If the amount is below the Stripe minimum
            AmountTooLargeError: If the amount is above the Stripe maximum
        """
        missing = []
        for field in REQUIRED_FIELDS:
            value = getattr(request, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                missing.append(field)
        if missing:
            raise MissingFieldsError(missing)

        if not math.isfinite(request.amount_minor_units):
            raise InvalidChargeAmountError("Please provide a valid payment amount.")
        if request.amount_minor_units < MIN_CHARGE_MINOR_UNITS:
            raise AmountTooSmallError("Amount too small")
        if request.amount_minor_units > MAX_CHARGE_MINOR_UNITS:
            raise AmountTooLargeError("Amount too large")

        return round_half_up(request.amount_minor_units)

    def _build_metadata(self, request: PaymentRequest, event: EventRecord) -> Dict[str, Any]:
        return {
            "eventId": event.event_id,
            "eventName": event.event_name,
            "customerName": request.customer_name,
            "customerEmail": request.customer_email,
            "customerPhone": request.customer_phone,
            "processedAt": datetime.now(timezone.utc).isoformat(),
        }

    async def submit_charge(self, request: PaymentRequest) -> ChargeResult:
        """
        Validate a request and charge it through Stripe.

        Args:
            request: Payment request from the checkout page

        Returns:
            ChargeResult: Success with charge id and receipt URL, or a
            classified failure

        Raises:
            MissingFieldsError: If a required field is missing
            AmountTooSmallError: If the amount is under 50 cents
            EventNotFoundError: If the event id is not in the catalog
            RemoteResourceError: If the catalog cannot be fetched
        """
        try:
            amount_minor_units = self._validate_payment_request(request)
        except PaymentValidationError as e:
            metrics.record_charge("rejected", e.category.value)
            logger.warning(
                "charge_rejected",
                category=e.category.value,
                missing=getattr(e, "missing", None),
            )
            raise

        event = await self.catalog.resolve_event(request.event_id)
        if event is None:
            metrics.record_charge("rejected", ErrorCategory.EVENT_NOT_FOUND.value)
            raise EventNotFoundError(request.event_id)

        try:
            charge = await self.gateway.create_charge(
                amount_minor_units=amount_minor_units,
                currency=self.settings.currency,
                description=f"Research Summit Registration: {event.event_name}",
                source=request.token,
                metadata=self._build_metadata(request, event),
                receipt_email=request.customer_email,
                statement_descriptor=self.settings.statement_descriptor,
            )
        except ProcessorError as e:
            metrics.record_charge("failed", e.category.value, amount_minor_units)
            return ChargeResult.failure(e.category.value, e.message)
        except Exception as e:
            classified = classify_processor_error(e)
            metrics.record_charge("failed", classified.category.value, amount_minor_units)
            logger.exception(
                "charge_unexpected_error",
                event_id=event.event_id,
                error_type=type(e).__name__,
            )
            return ChargeResult.failure(classified.category.value, classified.message)

        if charge.status != "succeeded":
            metrics.record_charge(
                "failed", ErrorCategory.PROCESSOR_DECLINED.value, amount_minor_units
            )
            logger.warning("charge_not_succeeded", charge_id=charge.id, status=charge.status)
            return ChargeResult.failure(
                ErrorCategory.PROCESSOR_DECLINED.value, NOT_SUCCESSFUL_MESSAGE
            )

        metrics.record_charge("succeeded", amount_cents=amount_minor_units)
        logger.info(
            "charge_succeeded",
            charge_id=charge.id,
            event_id=event.event_id,
            event_name=event.event_name,
            customer_email=request.customer_email,
            amount=amount_minor_units / 100,
        )

        return ChargeResult(
            success=True,
            charge_id=charge.id,
            receipt_url=getattr(charge, "receipt_url", None),
        )
