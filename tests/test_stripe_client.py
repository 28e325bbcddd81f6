"""
Unit tests for the Stripe gateway.
"""
from unittest.mock import MagicMock, patch

import pytest
import stripe

from summit_checkout.integrations.error_taxonomy import ErrorCategory
from summit_checkout.integrations.stripe_client import (
    GatewayConfigurationError,
    ProcessorCredentials,
    ProcessorError,
    StripeGateway,
)

CREDENTIALS = ProcessorCredentials(publishable_key="pk_test_abc", secret_key="sk_test_abc")

CHARGE_ARGS = {
    "amount_minor_units": 29900,
    "currency": "usd",
    "description": "Research Summit Registration: AI",
    "source": "tok_visa",
    "metadata": {"eventId": "RS2025AI"},
    "receipt_email": "ada@example.com",
    "statement_descriptor": "RESEARCH SUMMITS",
}


class TestStripeGateway:
    """Test suite for StripeGateway."""

    @pytest.mark.unit
    @pytest.mark.parametrize("secret_key", ["", "pk_test_abc", "not-a-key"])
    def test_rejects_non_secret_keys(self, secret_key: str) -> None:
        with pytest.raises(GatewayConfigurationError):
            StripeGateway(ProcessorCredentials(publishable_key="pk_test_abc", secret_key=secret_key))

    @pytest.mark.unit
    def test_resolve_credentials(self) -> None:
        gateway = StripeGateway(CREDENTIALS)

        assert gateway.resolve_credentials() == CREDENTIALS
        assert gateway.resolve_credentials().is_test_mode

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_create_charge_uses_per_request_key(self) -> None:
        charge = MagicMock(id="ch_123", status="succeeded")
        gateway = StripeGateway(CREDENTIALS, api_version="2024-06-20")

        with patch("stripe.Charge.create", return_value=charge) as create:
            result = await gateway.create_charge(**CHARGE_ARGS)

        assert result is charge
        create.assert_called_once_with(
            api_key="sk_test_abc",
            stripe_version="2024-06-20",
            amount=29900,
            currency="usd",
            description="Research Summit Registration: AI",
            source="tok_visa",
            metadata={"eventId": "RS2025AI"},
            receipt_email="ada@example.com",
            statement_descriptor="RESEARCH SUMMITS",
        )

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_stripe_errors_are_classified(self) -> None:
        gateway = StripeGateway(CREDENTIALS)
        declined = stripe.CardError("Your card was declined.", None, "card_declined")

        with patch("stripe.Charge.create", side_effect=declined):
            with pytest.raises(ProcessorError) as exc_info:
                await gateway.create_charge(**CHARGE_ARGS)

        assert exc_info.value.category == ErrorCategory.CARD_ERROR
        assert exc_info.value.message == "Your card was declined."
        assert exc_info.value.original_error is declined
