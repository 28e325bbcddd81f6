"""
Structured logging configuration.

structlog renders each event as JSON and hands it to the standard library,
where a python-json-logger handler writes one record per line. Request
context (request_id, method, path) is merged from contextvars bound by the
request middleware.
"""
import logging
import sys
from typing import IO, Any, Callable, Dict, List, Optional

import structlog
from pythonjsonlogger import jsonlogger

from summit_checkout.config import Settings, get_settings

# Third-party loggers and the level they are held at
THIRD_PARTY_LEVELS: Dict[str, int] = {
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "stripe": logging.INFO,
}

RECORD_FIELDS = "%(timestamp)s %(level)s %(name)s %(message)s"


def app_context_processor(settings: Settings) -> Callable[..., Dict[str, Any]]:
    """Build a processor that stamps the service name and environment on every event."""

    def add_app_context(
        logger: Any, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        event_dict["app_name"] = settings.app_name
        event_dict["app_env"] = settings.app_env
        return event_dict

    return add_app_context


def build_processors(settings: Settings) -> List[Any]:
    """Processor chain shared by every checkout logger, ending in the JSON renderer."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        app_context_processor(settings),
        structlog.processors.JSONRenderer(),
    ]


def build_json_handler(stream: Optional[IO[str]] = None) -> logging.Handler:
    """Stream handler writing one JSON record per line (stdout by default)."""
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            RECORD_FIELDS,
            rename_fields={"timestamp": "@timestamp", "name": "logger"},
        )
    )
    return handler


def setup_logging(settings: Optional[Settings] = None, stream: Optional[IO[str]] = None) -> None:
    """
    Configure structlog and the root logger.

    Replaces any handlers already on the root logger, so calling it again
    reconfigures rather than duplicates output.

    Args:
        settings: Settings providing log level, app name and environment
        stream: Where records are written (stdout when omitted)
    """
    settings = settings or get_settings()

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(build_json_handler(stream))
    root_logger.setLevel(settings.log_level)

    for name, level in THIRD_PARTY_LEVELS.items():
        logging.getLogger(name).setLevel(level)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_level=settings.log_level,
        app_env=settings.app_env,
    )
