"""
Pydantic schemas for API responses.

Request bodies reuse the domain PaymentRequest model.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from summit_checkout.core.models import EventRecord


class EventListResponse(BaseModel):
    """Response schema for the event catalog."""

    success: bool = Field(..., description="Always true for this schema")
    events: List[EventRecord] = Field(..., description="Events in catalog order")
    total: int = Field(..., description="Number of events")


class EventDetailResponse(BaseModel):
    """Response schema for a single event."""

    success: bool = Field(..., description="Always true for this schema")
    event: EventRecord = Field(..., description="The requested event")


class ErrorResponse(BaseModel):
    """Response schema for API errors."""

    success: bool = Field(default=False)
    error: str = Field(..., description="User-safe error message")


class ChargeResponse(BaseModel):
    """Response schema for /process-payment."""

    success: bool = Field(..., description="Whether the card was charged")
    chargeId: Optional[str] = Field(default=None, description="Stripe charge ID")
    receiptUrl: Optional[str] = Field(default=None, description="Stripe hosted receipt")
    errorCategory: Optional[str] = Field(default=None, description="Stable error category")
    errorMessage: Optional[str] = Field(default=None, description="User-safe error message")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "chargeId": "ch_3Nabc123",
                    "receiptUrl": "https://pay.stripe.com/receipts/...",
                },
                {
                    "success": False,
                    "errorCategory": "CardError",
                    "errorMessage": "Your card was declined.",
                },
            ]
        }
    }


class HealthCheckResponse(BaseModel):
    """Response schema for health checks."""

    status: str = Field(..., description="Overall health status")
    timestamp: str = Field(..., description="Check time (ISO 8601)")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    config: str = Field(..., description="loaded / not_loaded")
    configLoaded: bool = Field(..., description="Whether remote config state exists")
    configSource: str = Field(..., description="remote / fallback / none")
    usage: Optional[Dict[str, Any]] = Field(default=None, description="Example URLs")
