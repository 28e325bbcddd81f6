"""Checkout-level exceptions. Each carries the category reported to callers."""
from summit_checkout.integrations.error_taxonomy import ErrorCategory


class CheckoutError(Exception):
    """Base exception for user-correctable checkout failures."""

    category: ErrorCategory = ErrorCategory.UNKNOWN

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AmountValidationError(CheckoutError):
    """Raised when an override amount is rejected."""

    pass


class InvalidAmountError(AmountValidationError):
    """Override is not a positive finite number."""

    category = ErrorCategory.INVALID_AMOUNT


class AmountOutOfRangeError(AmountValidationError):
    """Override parsed but falls outside the accepted range."""

    category = ErrorCategory.OUT_OF_RANGE


class PaymentValidationError(CheckoutError):
    """Raised when a payment request fails local validation."""

    pass


class MissingFieldsError(PaymentValidationError):
    category = ErrorCategory.MISSING_FIELDS

    def __init__(self, missing: list[str]):
        super().__init__("Missing required fields")
        self.missing = missing


class AmountTooSmallError(PaymentValidationError):
    category = ErrorCategory.AMOUNT_TOO_SMALL


class InvalidChargeAmountError(PaymentValidationError):
    """Charge amount is not a finite number."""

    category = ErrorCategory.INVALID_AMOUNT


class AmountTooLargeError(PaymentValidationError):
    """Charge amount is above what Stripe accepts for a single charge."""

    category = ErrorCategory.OUT_OF_RANGE


class EventNotFoundError(CheckoutError):
    """Charge references an event id the catalog does not contain."""

    category = ErrorCategory.EVENT_NOT_FOUND

    def __init__(self, event_id: str):
        super().__init__("Conference event not found")
        self.event_id = event_id
