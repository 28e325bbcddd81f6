"""
Unit tests for structured logging setup.
"""
import io
import json
import logging
from typing import Any, Dict, Iterator, List

import pytest
import structlog

from summit_checkout.config import Settings
from summit_checkout.monitoring.logging import setup_logging


@pytest.fixture
def log_stream() -> Iterator[io.StringIO]:
    """Capture records and restore global logging state afterwards."""
    root_logger = logging.getLogger()
    saved_handlers = root_logger.handlers[:]
    saved_level = root_logger.level

    yield io.StringIO()

    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()
    root_logger.handlers[:] = saved_handlers
    root_logger.setLevel(saved_level)


def read_events(stream: io.StringIO) -> List[Dict[str, Any]]:
    records = [json.loads(line) for line in stream.getvalue().splitlines() if line]
    return [json.loads(record["message"]) for record in records]


class TestSetupLogging:
    """Test suite for setup_logging."""

    @pytest.mark.unit
    def test_events_are_json_with_app_context(
        self, test_settings: Settings, log_stream: io.StringIO
    ) -> None:
        setup_logging(test_settings, stream=log_stream)

        events = read_events(log_stream)

        assert events[0]["event"] == "logging_configured"
        assert events[0]["level"] == "info"
        assert events[0]["app_name"] == "summit-checkout-test"
        assert events[0]["app_env"] == "test"
        assert "timestamp" in events[0]

    @pytest.mark.unit
    def test_request_context_is_merged(
        self, test_settings: Settings, log_stream: io.StringIO
    ) -> None:
        setup_logging(test_settings, stream=log_stream)

        structlog.contextvars.bind_contextvars(request_id="req-1", path="/payment/RS2025AI")
        structlog.get_logger("summit_checkout.tests").info("checkout_rendered", event_id="RS2025AI")

        event = read_events(log_stream)[-1]
        assert event["event"] == "checkout_rendered"
        assert event["request_id"] == "req-1"
        assert event["path"] == "/payment/RS2025AI"
        assert event["event_id"] == "RS2025AI"

    @pytest.mark.unit
    def test_level_filters_and_reconfigure_does_not_duplicate(
        self, test_settings: Settings, log_stream: io.StringIO
    ) -> None:
        settings = test_settings.model_copy(update={"log_level": "WARNING"})
        setup_logging(settings, stream=log_stream)
        setup_logging(settings, stream=log_stream)

        logger = structlog.get_logger("summit_checkout.tests")
        logger.info("remote_fetch_completed")
        logger.warning("remote_config_fallback")

        assert [e["event"] for e in read_events(log_stream)] == ["remote_config_fallback"]
        assert len(logging.getLogger().handlers) == 1
        assert logging.getLogger("httpx").level == logging.WARNING
