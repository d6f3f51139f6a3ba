from __future__ import annotations

from dataclasses import dataclass

import httpx
import pytest

from lightrail.adapters.api.dependencies import build_services
from lightrail.adapters.config import Settings
from lightrail.domain.exceptions import FetchFailure, SourceUnavailable
from lightrail.domain.models import (
    FeedEntity,
    FeedMessage,
    GeoPoint,
    Stop,
    StopTimeUpdate,
    TripUpdate,
    VehiclePosition,
)
from lightrail.main import create_app

NOW = 1_700_000_000
URL = "https://feeds.example.test/lightrail/tripupdates.pb"

FEED = FeedMessage(
    timestamp=NOW,
    entities=(
        FeedEntity(
            id="1",
            trip_update=TripUpdate(
                trip_id="T1",
                direction_id=0,
                stop_time_updates=(
                    StopTimeUpdate(stop_id="8101", arrival_time=NOW + 120),
                    StopTimeUpdate(stop_id="8102", arrival_time=NOW + 240),
                ),
            ),
        ),
        FeedEntity(
            id="2",
            trip_update=TripUpdate(
                trip_id="T2",
                direction_id=1,
                stop_time_updates=(StopTimeUpdate(stop_id="8101", arrival_time=NOW + 45),),
            ),
        ),
        FeedEntity(
            id="3",
            vehicle=VehiclePosition(
                vehicle_id=None, trip_id="T1", direction_id=0, lat=-35.2, lon=149.1
            ),
        ),
    ),
)


@dataclass
class FakeFetcher:
    error: Exception | None = None
    calls: int = 0

    async def fetch(self, url: str, headers) -> bytes:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return b"raw-feed"


@dataclass
class FakeDecoder:
    feed: FeedMessage = FEED

    def decode(self, raw: bytes) -> FeedMessage:
        return self.feed


@dataclass
class FakeReferenceRepository:
    stops: tuple[Stop, ...] = ()

    def load_platform_stops(self, min_columns: int = 6) -> tuple[Stop, ...]:
        if not self.stops:
            raise SourceUnavailable("stops.txt not found")
        return self.stops


def _app(
    *,
    url: str | None = URL,
    fetcher: FakeFetcher | None = None,
    stops: tuple[Stop, ...] = (),
    headway: int | None = None,
    feed: FeedMessage = FEED,
):
    settings = Settings(trip_updates_url=url, snapshot_path=None, fallback_headway_s=headway)
    services = build_services(
        settings,
        fetcher=fetcher or FakeFetcher(),
        decoder=FakeDecoder(feed),
        reference_repository=FakeReferenceRepository(stops),
        clock=lambda: float(NOW),
    )
    return create_app(settings, services)


def _client(app) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=app)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_requires_stop_id() -> None:
    async with _client(_app()) as client:
        missing = await client.get("/api/departures")
        blank = await client.get("/api/departures", params={"stopId": "  "})

    assert missing.status_code == 400
    assert blank.status_code == 400


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_returns_next_per_direction() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/api/departures", params={"stopId": "8101"})

    assert resp.status_code == 200
    payload = resp.json()
    assert payload["stop_id"] == "8101"
    assert [(a["seconds_away"], a["direction_id"]) for a in payload["nexts"]] == [
        (45, 1),
        (120, 0),
    ]
    assert payload["next"] == payload["nexts"][0]
    assert payload["next"]["source"] == "realtime"


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_without_feed_are_empty() -> None:
    async with _client(_app(url=None)) as client:
        resp = await client.get("/api/departures", params={"stopId": "8101"})

    assert resp.json() == {"stop_id": "8101", "next": None, "nexts": []}


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_use_headway_fallback_when_enabled() -> None:
    async with _client(_app(url=None, headway=360)) as client:
        resp = await client.get("/api/departures", params={"stopId": "8101"})

    nexts = resp.json()["nexts"]
    assert [a["direction_id"] for a in nexts] == [0, 1]
    assert all(a["source"] == "fallback" for a in nexts)


@pytest.mark.unit
@pytest.mark.anyio
async def test_departures_omit_unknown_direction() -> None:
    feed = FeedMessage(
        entities=(
            FeedEntity(
                id="9",
                trip_update=TripUpdate(
                    trip_id="T9",
                    stop_time_updates=(
                        StopTimeUpdate(stop_id="8101", arrival_time=NOW + 90),
                    ),
                ),
            ),
        )
    )
    async with _client(_app(feed=feed)) as client:
        resp = await client.get("/api/departures", params={"stopId": "8101"})

    assert resp.json()["nexts"] == [
        {"epoch_seconds": NOW + 90, "seconds_away": 90, "source": "realtime"}
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_stops_prefer_reference_table() -> None:
    stops = (Stop(id="8101", name="Alinga Street", location=GeoPoint(lat=-35.27, lon=149.13)),)
    async with _client(_app(stops=stops)) as client:
        resp = await client.get("/api/stops")
        full = await client.get("/api/stops-full")

    assert resp.json() == [{"id": "8101", "name": "Alinga Street"}]
    assert full.json() == [
        {"id": "8101", "name": "Alinga Street", "lat": -35.27, "lon": 149.13}
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_stops_fall_back_to_live_feed_ids() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/api/stops")
        full = await client.get("/api/stops-full")

    assert resp.json() == [
        {"id": "8101", "name": "8101"},
        {"id": "8102", "name": "8102"},
    ]
    assert full.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_vehicles_use_entity_id_when_vehicle_id_missing() -> None:
    async with _client(_app()) as client:
        resp = await client.get("/api/vehicles")

    assert resp.json() == [
        {
            "id": "3",
            "trip_id": "T1",
            "direction_id": 0,
            "lat": -35.2,
            "lon": 149.1,
            "bearing": None,
            "stop_id": None,
        }
    ]


@pytest.mark.unit
@pytest.mark.anyio
async def test_rt_stop_ids_and_sample() -> None:
    async with _client(_app()) as client:
        ids = await client.get("/api/rt-stop-ids")
        sample = await client.get("/api/rt-sample", params={"n": 1})

    assert ids.json() == {"type": "TripUpdates", "stop_ids": ["8101", "8102"]}
    items = sample.json()
    assert len(items) == 1
    assert items[0]["id"] == "1"
    assert items[0]["stop_time_updates"][0] == {
        "stop_id": "8101",
        "arrival": NOW + 120,
        "departure": None,
    }


@pytest.mark.unit
@pytest.mark.anyio
async def test_raw_feed_is_unavailable_until_first_fetch() -> None:
    async with _client(_app()) as client:
        before = await client.get("/api/feed.pb")
        await client.get("/api/departures", params={"stopId": "8101"})
        after = await client.get("/api/feed.pb")

    assert before.status_code == 503
    assert after.status_code == 200
    assert after.content == b"raw-feed"
    assert after.headers["content-type"] == "application/octet-stream"


@pytest.mark.unit
@pytest.mark.anyio
async def test_refresh_fetches_even_when_cache_is_fresh() -> None:
    fetcher = FakeFetcher()
    async with _client(_app(fetcher=fetcher)) as client:
        await client.get("/api/rt-stop-ids")
        resp = await client.post("/api/refresh")

    assert resp.status_code == 200
    assert resp.json()["ok"] is True
    assert resp.json()["refreshed_at"].startswith("2023-11-14T22:13:20")
    assert fetcher.calls == 2


@pytest.mark.unit
@pytest.mark.anyio
async def test_refresh_failure_is_reported() -> None:
    fetcher = FakeFetcher(error=FetchFailure(status_code=502))
    async with _client(_app(fetcher=fetcher)) as client:
        resp = await client.post("/api/refresh")
        ids = await client.get("/api/rt-stop-ids")

    assert resp.status_code == 500
    assert resp.json() == {"ok": False}
    assert ids.json() == {"type": "Unknown", "stop_ids": []}
