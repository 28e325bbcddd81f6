"""
Remote JSON fetcher for the config and catalog sources.

One GET per call, bounded by a timeout. Failures are reported, never retried
and never partially returned.
"""
import json
import time
from typing import Any, Optional

import httpx
import structlog

from summit_checkout.monitoring.metrics import metrics

logger = structlog.get_logger(__name__)


class RemoteResourceError(Exception):
    """Base exception for remote JSON source failures."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.url = url


class FetchError(RemoteResourceError):
    """Raised on transport failure, timeout or non-2xx status."""

    pass


class ParseError(RemoteResourceError):
    """Raised when the response body is not the expected JSON."""

    pass


class RemoteJSONFetcher:
    """Fetches and decodes JSON documents over HTTP."""

    def __init__(
        self,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the fetcher.

        Args:
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.timeout = timeout
        self.transport = transport

    async def fetch(self, url: str, resource: str = "remote") -> Any:
        """
        GET a URL and decode the body as JSON.

        Args:
            url: Absolute URL to fetch
            resource: Label used for logs and metrics

        Returns:
            Any: Decoded JSON value

        Raises:
            FetchError: If the request fails or returns a non-2xx status
            ParseError: If the body is not valid JSON
        """
        start_time = time.time()

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                body = response.content

        except httpx.TimeoutException as e:
            metrics.record_remote_fetch(resource, "fetch_error", time.time() - start_time)
            logger.error("remote_fetch_timeout", resource=resource, url=url, timeout=self.timeout)
            raise FetchError(f"Timed out after {self.timeout}s fetching {url}", url) from e

        except httpx.HTTPStatusError as e:
            metrics.record_remote_fetch(resource, "fetch_error", time.time() - start_time)
            logger.error(
                "remote_fetch_bad_status",
                resource=resource,
                url=url,
                status_code=e.response.status_code,
            )
            raise FetchError(f"HTTP {e.response.status_code} fetching {url}", url) from e

        except httpx.HTTPError as e:
            metrics.record_remote_fetch(resource, "fetch_error", time.time() - start_time)
            logger.error("remote_fetch_failed", resource=resource, url=url, error=str(e))
            raise FetchError(f"Failed to fetch {url}: {e}", url) from e

        try:
            value = json.loads(body)
        except ValueError as e:
            metrics.record_remote_fetch(resource, "parse_error", time.time() - start_time)
            logger.error("remote_parse_failed", resource=resource, url=url, error=str(e))
            raise ParseError(f"Malformed JSON from {url}: {e}", url) from e

        duration = time.time() - start_time
        metrics.record_remote_fetch(resource, "ok", duration)
        logger.debug("remote_fetch_completed", resource=resource, url=url, duration_seconds=duration)

        return value
