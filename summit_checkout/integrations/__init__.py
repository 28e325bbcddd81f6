"""External integrations: remote JSON sources and the Stripe gateway."""
from .error_taxonomy import ClassifiedError, ErrorCategory, classify_processor_error
from .remote_json import FetchError, ParseError, RemoteJSONFetcher, RemoteResourceError
from .stripe_client import (
    GatewayConfigurationError,
    ProcessorCredentials,
    ProcessorError,
    StripeGateway,
)

__all__ = [
    "ClassifiedError",
    "ErrorCategory",
    "FetchError",
    "GatewayConfigurationError",
    "ParseError",
    "ProcessorCredentials",
    "ProcessorError",
    "RemoteJSONFetcher",
    "RemoteResourceError",
    "StripeGateway",
    "classify_processor_error",
]
