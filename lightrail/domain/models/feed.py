from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal


@dataclass(frozen=True, slots=True)
class StopTimeUpdate:
    """Predicted arrival/departure at one stop. Times are epoch seconds."""

    stop_id: str | None
    arrival_time: int | None = None
    departure_time: int | None = None


@dataclass(frozen=True, slots=True)
class TripUpdate:
    trip_id: str | None
    direction_id: int | None = None  # 0, 1 or None when the feed omits it
    stop_time_updates: tuple[StopTimeUpdate, ...] = ()


@dataclass(frozen=True, slots=True)
class VehiclePosition:
    vehicle_id: str | None
    trip_id: str | None = None
    direction_id: int | None = None
    lat: float | None = None
    lon: float | None = None
    bearing: float | None = None
    stop_id: str | None = None

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True, slots=True)
class FeedEntity:
    id: str
    trip_update: TripUpdate | None = None
    vehicle: VehiclePosition | None = None


FeedType = Literal["TripUpdates", "VehiclePositions", "Unknown"]


@dataclass(frozen=True, slots=True)
class FeedMessage:
    """Decoded GTFS-Realtime feed. Entity order is the upstream order."""

    timestamp: int | None = None
    entities: tuple[FeedEntity, ...] = ()

    def trip_updates(self) -> Iterator[tuple[FeedEntity, TripUpdate]]:
        for entity in self.entities:
            if entity.trip_update is not None:
                yield entity, entity.trip_update

    @property
    def has_trip_updates(self) -> bool:
        return any(e.trip_update is not None for e in self.entities)

    @property
    def has_vehicles(self) -> bool:
        return any(e.vehicle is not None for e in self.entities)

    @property
    def feed_type(self) -> FeedType:
        if self.has_trip_updates:
            return "TripUpdates"
        if self.has_vehicles:
            return "VehiclePositions"
        return "Unknown"

    def stop_ids(self) -> tuple[str, ...]:
        """Distinct stop ids referenced by trip updates, sorted."""

        seen: set[str] = set()
        for _, tu in self.trip_updates():
            for stu in tu.stop_time_updates:
                if stu.stop_id:
                    seen.add(str(stu.stop_id))
        return tuple(sorted(seen))


@dataclass(frozen=True, slots=True)
class FeedSnapshot:
    """One successful fetch: decoded message, its raw bytes and fetch time."""

    message: FeedMessage
    raw_bytes: bytes = field(repr=False)
    fetched_at: float
