"""Core checkout logic."""
from .catalog import EventCatalog
from .payment_processor import PaymentProcessor
from .pricing import resolve_amount, to_minor_units
from .remote_config import RemoteConfigCache

__all__ = [
    "EventCatalog",
    "PaymentProcessor",
    "RemoteConfigCache",
    "resolve_amount",
    "to_minor_units",
]
