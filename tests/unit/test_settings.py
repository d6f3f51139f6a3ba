from __future__ import annotations

import pytest

from lightrail.adapters.config import Settings, parse_headers

ENV_VARS = (
    "GTFS_RT_TRIP_UPDATES_URL",
    "GTFS_RT_API_KEY",
    "GTFS_RT_HEADERS",
    "GTFS_RT_TIMEOUT_S",
    "FEED_TTL_MS",
    "STOPS_PATH",
    "FEED_SNAPSHOT_PATH",
    "FEED_SNAPSHOT_BUCKET",
    "FALLBACK_HEADWAY_SECONDS",
    "PORT",
)


@pytest.fixture
def clean_env(monkeypatch) -> pytest.MonkeyPatch:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults_without_environment(clean_env) -> None:
    s = Settings.from_env()

    assert s.trip_updates_url is None
    assert s.feed_ttl_s == 15.0
    assert s.stops_path == "data/gtfs/stops.txt"
    assert s.snapshot_path == "tmp/lightrail.pb"
    assert s.fallback_headway_s is None
    assert s.port == 4000
    assert s.feed_headers() == {}


def test_values_are_read_from_environment(clean_env) -> None:
    clean_env.setenv("GTFS_RT_TRIP_UPDATES_URL", " https://feed.test/rt ")
    clean_env.setenv("GTFS_RT_API_KEY", "apikey-123")
    clean_env.setenv("GTFS_RT_HEADERS", "Accept:application/x-protobuf")
    clean_env.setenv("FEED_TTL_MS", "5000")
    clean_env.setenv("FALLBACK_HEADWAY_SECONDS", "300")
    clean_env.setenv("PORT", "8080")

    s = Settings.from_env()

    assert s.trip_updates_url == "https://feed.test/rt"
    assert s.feed_ttl_s == 5.0
    assert s.fallback_headway_s == 300
    assert s.port == 8080
    assert s.feed_headers() == {
        "Accept": "application/x-protobuf",
        "Authorization": "apikey-123",
    }


def test_invalid_numbers_fall_back_to_defaults(clean_env) -> None:
    clean_env.setenv("FEED_TTL_MS", "soon")
    clean_env.setenv("PORT", "http")

    s = Settings.from_env()

    assert s.feed_ttl_s == 15.0
    assert s.port == 4000


def test_parse_headers_skips_malformed_parts() -> None:
    assert parse_headers("A:1; broken ;:x; B : two:parts ") == {"A": "1", "B": "two:parts"}
    assert parse_headers(None) == {}
