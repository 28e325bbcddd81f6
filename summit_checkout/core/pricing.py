"""
Amount resolution for checkout.

An override is parsed first and range-checked second, so malformed input
and out-of-range input are reported with different categories.
"""
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

from .exceptions import AmountOutOfRangeError, InvalidAmountError
from .models import EventRecord

MIN_OVERRIDE = Decimal("1")
MAX_OVERRIDE = Decimal("10000")
MINOR_UNITS_PER_MAJOR = 100

AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?")


def parse_amount(raw: str) -> Decimal:
    """
    Parse an override amount.

    Accepts plain decimal notation with an optional exponent. Anything else,
    such as `1_000` or `NaN`, is rejected.

    Raises:
        InvalidAmountError: If the value is not a positive decimal number
    """
    text = raw.strip()
    if not AMOUNT_PATTERN.fullmatch(text):
        raise InvalidAmountError("Please provide a valid payment amount.")

    amount = Decimal(text)
    if amount <= 0:
        raise InvalidAmountError("Please provide a valid payment amount.")
    return amount


def resolve_amount(event: EventRecord, override: Optional[str] = None) -> Decimal:
    """
    Resolve the amount to charge for an event.

    Args:
        event: Catalog event, whose cost is the default
        override: Caller-supplied amount in dollars, if any

    Returns:
        Decimal: Amount in dollars

    Raises:
        InvalidAmountError: If the override cannot be parsed or is not positive
        AmountOutOfRangeError: If the override is outside [1, 10000]
    """
    if override is None or not override.strip():
        return Decimal(str(event.cost))

    amount = parse_amount(override)
    if amount < MIN_OVERRIDE or amount > MAX_OVERRIDE:
        raise AmountOutOfRangeError(
            f"Payment amount must be between ${MIN_OVERRIDE} and ${MAX_OVERRIDE:,}."
        )
    return amount


def round_half_up(value: Union[Decimal, float, int]) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(Decimal(str(value)).to_integral_value(rounding=ROUND_HALF_UP))


def to_minor_units(amount: Union[Decimal, float, int]) -> int:
    """Convert dollars to cents, rounding half up."""
    return round_half_up(Decimal(str(amount)) * MINOR_UNITS_PER_MAJOR)
