"""
Maps processor failures to stable, user-safe error categories.

Card errors keep Stripe's own message, which is written for cardholders.
Every other kind gets a generic message so internal detail never reaches
the caller.
"""
from dataclasses import dataclass
from enum import Enum

import stripe


class ErrorCategory(str, Enum):
    """Every error category a checkout caller can observe."""

    INVALID_AMOUNT = "InvalidAmount"
    OUT_OF_RANGE = "OutOfRange"
    MISSING_FIELDS = "MissingFields"
    AMOUNT_TOO_SMALL = "AmountTooSmall"
    EVENT_NOT_FOUND = "EventNotFound"
    CATALOG_UNAVAILABLE = "CatalogUnavailable"
    PROCESSOR_DECLINED = "ProcessorDeclined"
    CARD_ERROR = "CardError"
    INVALID_REQUEST = "InvalidRequest"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    UNKNOWN = "Unknown"


INVALID_REQUEST_MESSAGE = "Invalid payment information"
SERVICE_UNAVAILABLE_MESSAGE = "Payment service temporarily unavailable"
UNKNOWN_MESSAGE = "Payment failed. Please try again."


@dataclass(frozen=True)
class ClassifiedError:
    """Category plus the message that may be shown to the customer."""

    category: ErrorCategory
    message: str


def classify_processor_error(error: BaseException) -> ClassifiedError:
    """
    Classify a processor exception.

    Args:
        error: Exception raised while creating a charge

    Returns:
        ClassifiedError: Stable category and user-safe message
    """
    if isinstance(error, stripe.CardError):
        # user_message is only populated when Stripe returned a JSON body
        message = error.user_message or getattr(error, "_message", None)
        return ClassifiedError(ErrorCategory.CARD_ERROR, message or UNKNOWN_MESSAGE)
    if isinstance(error, stripe.InvalidRequestError):
        return ClassifiedError(ErrorCategory.INVALID_REQUEST, INVALID_REQUEST_MESSAGE)
    if isinstance(
        error,
        (stripe.APIError, stripe.APIConnectionError, stripe.RateLimitError),
    ):
        return ClassifiedError(ErrorCategory.SERVICE_UNAVAILABLE, SERVICE_UNAVAILABLE_MESSAGE)
    return ClassifiedError(ErrorCategory.UNKNOWN, UNKNOWN_MESSAGE)
