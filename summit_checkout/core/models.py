"""
Domain models for remote config, the event catalog and charges.

Wire names are camelCase (aliases); attributes are snake_case.
"""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StripeKeys(BaseModel):
    """Stripe keys published in the remote config."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    publishable_key: Optional[str] = Field(default=None, alias="publishableKey")
    secret_key: Optional[str] = Field(default=None, alias="secretKey")


class Endpoints(BaseModel):
    """Endpoint URLs published in the remote config."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    events_url: Optional[str] = Field(default=None, alias="eventsUrl")
    redirect_url: Optional[str] = Field(default=None, alias="redirectUrl")


class RemoteConfig(BaseModel):
    """Remotely managed configuration, immutable for the process lifetime."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    stripe: StripeKeys = Field(default_factory=StripeKeys)
    endpoints: Endpoints = Field(default_factory=Endpoints)

    @field_validator("stripe", "endpoints", mode="before")
    @classmethod
    def null_section_is_empty(cls, v: Any) -> Any:
        return {} if v is None else v


class EventRecord(BaseModel):
    """A purchasable conference event from the remote catalog."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    event_id: str = Field(..., alias="eventId")
    event_name: str = Field(..., alias="eventName")
    event_description: str = Field(default="", alias="eventDescription")
    cost: float = Field(..., gt=0, allow_inf_nan=False, description="Default price in dollars")


class PaymentRequest(BaseModel):
    """
    Charge request posted by the checkout page.

    Every field is optional here so that incomplete requests are reported
    as MissingFields rather than rejected by request parsing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        coerce_numbers_to_str=True,
        json_schema_extra={
            "examples": [
                {
                    "token": "tok_visa",
                    "eventId": "RS2025AI",
                    "name": "Ada Lovelace",
                    "email": "ada@example.com",
                    "phone": "+44 20 7946 0000",
                    "amount": 29900,
                }
            ]
        },
    )

    token: Optional[str] = Field(default=None, description="Stripe.js card token")
    event_id: Optional[str] = Field(default=None, alias="eventId")
    customer_name: Optional[str] = Field(default=None, alias="name")
    customer_email: Optional[str] = Field(default=None, alias="email")
    customer_phone: Optional[str] = Field(default=None, alias="phone")
    amount_minor_units: Optional[float] = Field(
        default=None, alias="amount", description="Amount in cents"
    )


class ChargeResult(BaseModel):
    """Normalized outcome of a charge attempt."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    charge_id: Optional[str] = Field(default=None, alias="chargeId")
    receipt_url: Optional[str] = Field(default=None, alias="receiptUrl")
    error_category: Optional[str] = Field(default=None, alias="errorCategory")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")

    @classmethod
    def failure(cls, category: str, message: str) -> "ChargeResult":
        """Build a failed result."""
        return cls(success=False, error_category=category, error_message=message)

    def to_response(self) -> dict[str, Any]:
        """Serialize with wire names, dropping unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
