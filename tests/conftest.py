"""
Pytest configuration and fixtures.

Remote JSON sources are served by an httpx.MockTransport, so no test
touches the network.
"""
from collections import Counter
from typing import Any, Dict
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from summit_checkout.config import Settings
from summit_checkout.core.catalog import EventCatalog
from summit_checkout.core.remote_config import RemoteConfigCache
from summit_checkout.integrations.remote_json import RemoteJSONFetcher
from summit_checkout.integrations.stripe_client import StripeGateway

CONFIG_URL = "https://config.test/stripe-config.json"
DEFAULT_EVENTS_URL = "https://config.test/events.json"
REMOTE_EVENTS_URL = "https://catalog.test/events.json"
REDIRECT_URL = "https://summits.test/index.html"


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line("markers", "unit: fast tests without I/O")
    config.addinivalue_line("markers", "integration: tests through the HTTP surface")


class FakeRemote:
    """Serves canned responses by URL and counts requests per URL."""

    def __init__(self, responses: Dict[str, Any]):
        self.responses = responses
        self.calls: Counter = Counter()

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls[url] += 1
        response = self.responses.get(url)

        if response is None:
            return httpx.Response(404, text="404: Not Found")
        if isinstance(response, Exception):
            raise response
        if isinstance(response, httpx.Response):
            return response
        return httpx.Response(200, json=response)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def fetcher(self) -> RemoteJSONFetcher:
        return RemoteJSONFetcher(timeout=1.0, transport=self.transport)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        app_name="summit-checkout-test",
        app_env="test",
        log_level="DEBUG",
        config_url=CONFIG_URL,
        default_events_url=DEFAULT_EVENTS_URL,
        default_redirect_url="https://fallback.test/index.html",
        stripe_publishable_key=None,
        stripe_secret_key=None,
    )


@pytest.fixture
def remote_config_payload() -> Dict[str, Any]:
    return {
        "stripe": {
            "publishableKey": "pk_test_remote",
            "secretKey": "sk_test_remote",
        },
        "endpoints": {
            "eventsUrl": REMOTE_EVENTS_URL,
            "redirectUrl": REDIRECT_URL,
        },
    }


@pytest.fixture
def catalog_payload() -> list[Dict[str, Any]]:
    return [
        {
            "eventId": "RS2025AI",
            "eventName": "Research Summit 2025: Artificial Intelligence",
            "eventDescription": "Two days of applied AI research.",
            "cost": 299,
            "venue": "Dubai",
        },
        {
            "eventId": "RS2025BIO",
            "eventName": "Research Summit 2025: Biotechnology",
            "eventDescription": "Genomics and synthetic biology.",
            "cost": 349.5,
        },
    ]


@pytest.fixture
def fake_remote(
    remote_config_payload: Dict[str, Any], catalog_payload: list[Dict[str, Any]]
) -> FakeRemote:
    return FakeRemote(
        {
            CONFIG_URL: remote_config_payload,
            REMOTE_EVENTS_URL: catalog_payload,
        }
    )


@pytest.fixture
def config_cache(test_settings: Settings, fake_remote: FakeRemote) -> RemoteConfigCache:
    return RemoteConfigCache(test_settings, fake_remote.fetcher())


@pytest.fixture
def catalog(config_cache: RemoteConfigCache, fake_remote: FakeRemote) -> EventCatalog:
    return EventCatalog(config_cache, fake_remote.fetcher())


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """Stripe gateway whose charges succeed."""
    gateway = AsyncMock(spec=StripeGateway)
    charge = MagicMock()
    charge.id = "ch_123"
    charge.status = "succeeded"
    charge.receipt_url = "https://pay.stripe.com/receipts/ch_123"
    gateway.create_charge.return_value = charge
    return gateway


@pytest.fixture
def payment_payload() -> Dict[str, Any]:
    """Sample /process-payment body."""
    return {
        "token": "tok_visa",
        "eventId": "RS2025AI",
        "name": "Ada Lovelace",
        "email": "ada@example.com",
        "phone": "+44 20 7946 0000",
        "amount": 29900,
    }
