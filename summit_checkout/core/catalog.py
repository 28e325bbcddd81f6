"""
Event catalog lookups.

The catalog is fetched on every call so price changes are visible
immediately. Fetch failures and a body that is not a JSON array propagate
to the caller. Entries that fail validation are skipped, so one bad event
never hides the others. An unknown event id is not an error and resolves
to None.
"""
from typing import List, Optional

import structlog
from pydantic import ValidationError

from summit_checkout.integrations.remote_json import ParseError, RemoteJSONFetcher
from summit_checkout.monitoring.metrics import metrics

from .models import EventRecord
from .remote_config import RemoteConfigCache

logger = structlog.get_logger(__name__)


class EventCatalog:
    """Resolves events from the remotely hosted catalog."""

    def __init__(self, config_cache: RemoteConfigCache, fetcher: RemoteJSONFetcher):
        """
        Initialize the catalog.

        Args:
            config_cache: Source of the catalog URL
            fetcher: Remote JSON fetcher
        """
        self.config_cache = config_cache
        self.fetcher = fetcher

    async def list_events(self) -> List[EventRecord]:
        """
        Fetch the full catalog.

        Returns:
            List[EventRecord]: Every valid event in catalog order

        Raises:
            FetchError: If the catalog cannot be fetched
            ParseError: If the body is not a JSON array
        """
        url = await self.config_cache.get_events_url()
        raw = await self.fetcher.fetch(url, resource="catalog")

        if not isinstance(raw, list):
            logger.error("catalog_not_a_list", url=url, body_type=type(raw).__name__)
            raise ParseError(f"Catalog at {url} is not a JSON array", url)

        events = []
        for position, entry in enumerate(raw):
            try:
                events.append(EventRecord.model_validate(entry))
            except ValidationError as e:
                metrics.record_invalid_catalog_entry()
                logger.warning(
                    "catalog_entry_skipped",
                    url=url,
                    position=position,
                    event_id=entry.get("eventId") if isinstance(entry, dict) else None,
                    error_count=e.error_count(),
                )

        logger.debug("catalog_loaded", url=url, total=len(events), skipped=len(raw) - len(events))
        return events

    async def resolve_event(self, event_id: str) -> Optional[EventRecord]:
        """
        Find an event by exact id.

        Args:
            event_id: Catalog event identifier

        Returns:
            Optional[EventRecord]: The event, or None when absent or invalid
        """
        for event in await self.list_events():
            if event.event_id == event_id:
                return event

        logger.info("event_not_found", event_id=event_id)
        return None
