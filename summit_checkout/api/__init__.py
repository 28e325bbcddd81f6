"""FastAPI application and routes."""
from .main import create_app, main
from .schemas import ChargeResponse, EventDetailResponse, EventListResponse

__all__ = [
    "create_app",
    "main",
    "ChargeResponse",
    "EventDetailResponse",
    "EventListResponse",
]
