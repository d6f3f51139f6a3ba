from __future__ import annotations

import os
from dataclasses import dataclass, field


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def _env_float(name: str, default: float) -> float:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int | None) -> int | None:
    raw = _env_str(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def parse_headers(raw: str | None) -> dict[str, str]:
    """Parse 'Key:Value;Key2:Value2' into a header mapping."""

    raw = (raw or "").strip()
    if not raw:
        return {}
    headers: dict[str, str] = {}
    for part in raw.split(";"):
        part = part.strip()
        if not part or ":" not in part:
            continue
        k, v = part.split(":", 1)
        k = k.strip()
        if k:
            headers[k] = v.strip()
    return headers


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration, read from the environment by `from_env()`.

    Env vars:
      - GTFS_RT_TRIP_UPDATES_URL: upstream GTFS-RT feed (unset: no feed)
      - GTFS_RT_API_KEY: sent as the Authorization header
      - GTFS_RT_HEADERS: extra headers, as 'Key:Value;Key2:Value2'
      - GTFS_RT_TIMEOUT_S: request timeout (default 10)
      - FEED_TTL_MS: feed cache TTL in milliseconds (default 15000)
      - STOPS_PATH: GTFS static stops.txt (default data/gtfs/stops.txt)
      - FEED_SNAPSHOT_PATH: raw payload export file (default tmp/lightrail.pb)
      - FEED_SNAPSHOT_BUCKET / FEED_SNAPSHOT_KEY: export to S3 instead
      - AWS_REGION, ENDPOINT_URL: S3 client options (ENDPOINT_URL for LocalStack)
      - FALLBACK_HEADWAY_SECONDS: enables headway estimates in /api/departures
      - HOST, PORT, LOG_LEVEL: server options
    """

    trip_updates_url: str | None = None
    api_key: str | None = None
    extra_headers: dict[str, str] = field(default_factory=dict)
    timeout_s: float = 10.0
    feed_ttl_s: float = 15.0
    stops_path: str = "data/gtfs/stops.txt"
    snapshot_path: str | None = "tmp/lightrail.pb"
    snapshot_bucket: str | None = None
    snapshot_key: str = "feeds/lightrail.pb"
    aws_region: str = "ap-southeast-2"
    aws_endpoint_url: str | None = None
    fallback_headway_s: int | None = None
    host: str = "0.0.0.0"
    port: int = 4000
    log_level: str = "INFO"

    @staticmethod
    def from_env() -> "Settings":
        ttl_ms = _env_float("FEED_TTL_MS", 15000.0)
        return Settings(
            trip_updates_url=_env_str("GTFS_RT_TRIP_UPDATES_URL"),
            api_key=_env_str("GTFS_RT_API_KEY"),
            extra_headers=parse_headers(os.getenv("GTFS_RT_HEADERS")),
            timeout_s=_env_float("GTFS_RT_TIMEOUT_S", 10.0),
            feed_ttl_s=max(0.0, ttl_ms / 1000.0),
            stops_path=_env_str("STOPS_PATH") or "data/gtfs/stops.txt",
            snapshot_path=_env_str("FEED_SNAPSHOT_PATH") or "tmp/lightrail.pb",
            snapshot_bucket=_env_str("FEED_SNAPSHOT_BUCKET"),
            snapshot_key=_env_str("FEED_SNAPSHOT_KEY") or "feeds/lightrail.pb",
            aws_region=_env_str("AWS_REGION") or "ap-southeast-2",
            aws_endpoint_url=_env_str("ENDPOINT_URL"),
            fallback_headway_s=_env_int("FALLBACK_HEADWAY_SECONDS", None),
            host=_env_str("HOST") or "0.0.0.0",
            port=_env_int("PORT", 4000) or 4000,
            log_level=(_env_str("LOG_LEVEL") or "INFO").upper(),
        )

    def feed_headers(self) -> dict[str, str]:
        headers = dict(self.extra_headers)
        if self.api_key:
            headers["Authorization"] = self.api_key
        return headers
