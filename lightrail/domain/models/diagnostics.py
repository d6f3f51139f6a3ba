from __future__ import annotations

from dataclasses import dataclass

from .feed import FeedType, StopTimeUpdate


@dataclass(frozen=True, slots=True)
class FeedDiagnostics:
    feed_type: FeedType
    stop_ids: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class TripUpdateSample:
    entity_id: str
    trip_id: str | None
    direction_id: int | None
    stop_time_updates: tuple[StopTimeUpdate, ...] = ()
