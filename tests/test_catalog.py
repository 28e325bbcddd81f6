"""
Unit tests for event catalog lookups.
"""
import httpx
import pytest

from summit_checkout.config import Settings
from summit_checkout.core.catalog import EventCatalog
from summit_checkout.core.remote_config import RemoteConfigCache
from summit_checkout.integrations.remote_json import FetchError, ParseError

from conftest import CONFIG_URL, DEFAULT_EVENTS_URL, REMOTE_EVENTS_URL, FakeRemote


def make_catalog(settings: Settings, responses: dict) -> tuple[EventCatalog, FakeRemote]:
    remote = FakeRemote(responses)
    fetcher = remote.fetcher()
    return EventCatalog(RemoteConfigCache(settings, fetcher), fetcher), remote


class TestEventCatalog:
    """Test suite for EventCatalog."""

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_resolve_event(self, catalog: EventCatalog) -> None:
        event = await catalog.resolve_event("RS2025AI")

        assert event is not None
        assert event.event_name == "Research Summit 2025: Artificial Intelligence"
        assert event.cost == 299

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize("event_id", ["RS2099XX", "rs2025ai", "RS2025AI ", ""])
    async def test_unknown_event_returns_none(self, catalog: EventCatalog, event_id: str) -> None:
        assert await catalog.resolve_event(event_id) is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_catalog_is_fetched_on_every_call(
        self, catalog: EventCatalog, fake_remote: FakeRemote
    ) -> None:
        await catalog.resolve_event("RS2025AI")
        await catalog.resolve_event("RS2025BIO")
        await catalog.list_events()

        assert fake_remote.calls[REMOTE_EVENTS_URL] == 3
        assert fake_remote.calls[CONFIG_URL] == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_price_changes_are_visible_immediately(
        self, catalog: EventCatalog, fake_remote: FakeRemote, catalog_payload: list
    ) -> None:
        assert (await catalog.resolve_event("RS2025AI")).cost == 299

        fake_remote.responses[REMOTE_EVENTS_URL] = [dict(catalog_payload[0], cost=399)]

        assert (await catalog.resolve_event("RS2025AI")).cost == 399

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_default_url_used_without_remote_config(
        self, test_settings: Settings, catalog_payload: list
    ) -> None:
        catalog, remote = make_catalog(
            test_settings,
            {CONFIG_URL: httpx.ConnectError("down"), DEFAULT_EVENTS_URL: catalog_payload},
        )

        events = await catalog.list_events()

        assert [event.event_id for event in events] == ["RS2025AI", "RS2025BIO"]
        assert remote.calls[DEFAULT_EVENTS_URL] == 1

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_fetch_failure_propagates(self, test_settings: Settings) -> None:
        catalog, _ = make_catalog(
            test_settings,
            {CONFIG_URL: {}, DEFAULT_EVENTS_URL: httpx.ConnectError("down")},
        )

        with pytest.raises(FetchError):
            await catalog.resolve_event("RS2025AI")

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [{"events": []}, "RS2025AI", 42],
        ids=["object", "string", "number"],
    )
    async def test_non_array_catalog_raises_parse_error(
        self, test_settings: Settings, body: object
    ) -> None:
        catalog, _ = make_catalog(test_settings, {CONFIG_URL: {}, DEFAULT_EVENTS_URL: body})

        with pytest.raises(ParseError):
            await catalog.list_events()

    @pytest.mark.unit
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "entry",
        [
            {"eventId": "RS2026X", "eventName": "Future", "cost": 0},
            {"eventId": "RS2026X", "eventName": "Future", "cost": -10},
            {"eventId": "RS2026X", "eventName": "Future"},
            {"eventId": "RS2026X", "cost": 299},
            {"eventName": "Future", "cost": 299},
            "RS2026X",
        ],
        ids=["zero-cost", "negative-cost", "missing-cost", "missing-name", "missing-id", "string"],
    )
    async def test_invalid_entry_does_not_hide_valid_events(
        self, test_settings: Settings, catalog_payload: list, entry: object
    ) -> None:
        catalog, _ = make_catalog(
            test_settings,
            {CONFIG_URL: {}, DEFAULT_EVENTS_URL: catalog_payload + [entry]},
        )

        events = await catalog.list_events()
        event = await catalog.resolve_event("RS2025AI")

        assert [e.event_id for e in events] == ["RS2025AI", "RS2025BIO"]
        assert event is not None
        assert event.cost == 299

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_invalid_entry_resolves_to_none(
        self, test_settings: Settings, catalog_payload: list
    ) -> None:
        bad = {"eventId": "RS2026X", "eventName": "Future", "cost": 0}
        catalog, _ = make_catalog(
            test_settings, {CONFIG_URL: {}, DEFAULT_EVENTS_URL: catalog_payload + [bad]}
        )

        assert await catalog.resolve_event("RS2026X") is None

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_extra_catalog_fields_are_kept(self, catalog: EventCatalog) -> None:
        event = await catalog.resolve_event("RS2025AI")

        dumped = event.model_dump(by_alias=True)

        assert dumped["eventId"] == "RS2025AI"
        assert dumped["venue"] == "Dubai"
