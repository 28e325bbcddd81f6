"""
Stripe charge gateway with error classification.

Implements:
- Credential validation at construction time
- Charge creation off the event loop
- Classification of Stripe errors into user-safe categories
"""
import asyncio
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import stripe
import structlog

from summit_checkout.monitoring.metrics import metrics

from .error_taxonomy import ErrorCategory, classify_processor_error

logger = structlog.get_logger(__name__)

SECRET_KEY_PREFIXES = ("sk_test_", "sk_live_", "rk_test_", "rk_live_")


@dataclass(frozen=True)
class ProcessorCredentials:
    """Resolved Stripe key pair."""

    publishable_key: str
    secret_key: str

    @property
    def is_test_mode(self) -> bool:
        """Check if using Stripe test mode."""
        return "_test_" in self.secret_key


class GatewayConfigurationError(Exception):
    """Raised when a Stripe gateway cannot be built from the credentials."""

    pass


class ProcessorError(Exception):
    """Classified failure raised by the Stripe gateway."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory,
        original_error: Optional[Exception] = None,
    ):
        """
        Initialize processor error.

        Args:
            message: User-safe error message
            category: Classification of error
            original_error: Original Stripe exception
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.original_error = original_error


class StripeGateway:
    """
    Thin async wrapper around the Stripe Charges API.

    The secret key is passed per request instead of being set on the
    global stripe module, so several gateways can coexist in one process.
    """

    def __init__(
        self,
        credentials: ProcessorCredentials,
        api_version: Optional[str] = None,
    ) -> None:
        """
        Initialize Stripe gateway.

        Args:
            credentials: Resolved Stripe keys
            api_version: Optional pinned Stripe API version

        Raises:
            GatewayConfigurationError: If the secret key is not a Stripe secret key
        """
        if not credentials.secret_key or not credentials.secret_key.startswith(
            SECRET_KEY_PREFIXES
        ):
            raise GatewayConfigurationError(
                "Invalid Stripe secret key format. Must start with 'sk_test_', "
                "'sk_live_', 'rk_test_' or 'rk_live_'"
            )

        self._credentials = credentials
        self.api_version = api_version

        logger.info(
            "stripe_gateway_initialized",
            api_version=api_version,
            test_mode=credentials.is_test_mode,
        )

    def resolve_credentials(self) -> ProcessorCredentials:
        """Return the credentials this gateway charges with."""
        return self._credentials

    @staticmethod
    def _handle_stripe_error(error: stripe.StripeError) -> None:
        """
        Classify a Stripe error and re-raise it as a ProcessorError.

        Args:
            error: Stripe error

        Raises:
            ProcessorError: Classified error
        """
        classified = classify_processor_error(error)

        logger.error(
            "stripe_api_error",
            category=classified.category.value,
            error_type=type(error).__name__,
            error_code=getattr(error, "code", None),
            error_message=str(error),
        )

        raise ProcessorError(
            message=classified.message,
            category=classified.category,
            original_error=error,
        )

    async def create_charge(
        self,
        amount_minor_units: int,
        currency: str,
        description: str,
        source: str,
        metadata: Dict[str, Any],
        receipt_email: str,
        statement_descriptor: str,
    ) -> stripe.Charge:
        """
        Create a Stripe charge.

        Args:
            amount_minor_units: Amount in cents
            currency: Currency code (e.g., 'usd')
            description: Human readable description
            source: Payment method token from Stripe.js
            metadata: Metadata bag stored on the charge
            receipt_email: Address Stripe sends its receipt to
            statement_descriptor: Text on the card statement

        Returns:
            stripe.Charge: Created charge

        Raises:
            ProcessorError: If Stripe rejects the charge
        """
        logger.info(
            "creating_charge",
            amount_minor_units=amount_minor_units,
            currency=currency,
            event_id=metadata.get("eventId"),
        )

        def _create() -> stripe.Charge:
            return stripe.Charge.create(
                api_key=self._credentials.secret_key,
                stripe_version=self.api_version,
                amount=amount_minor_units,
                currency=currency,
                description=description,
                source=source,
                metadata=metadata,
                receipt_email=receipt_email,
                statement_descriptor=statement_descriptor,
            )

        start_time = time.time()
        try:
            charge = await asyncio.get_running_loop().run_in_executor(None, _create)
        except stripe.StripeError as e:
            self._handle_stripe_error(e)
            raise  # For type checker
        finally:
            metrics.record_stripe_api_call("create_charge", time.time() - start_time)

        logger.info("charge_created", charge_id=charge.id, status=charge.status)

        return charge
