from __future__ import annotations

from dataclasses import dataclass

from google.protobuf.message import DecodeError
from google.transit import gtfs_realtime_pb2

from lightrail.app.ports.output import IFeedDecoder
from lightrail.domain.exceptions import DecodeFailure
from lightrail.domain.models import (
    FeedEntity,
    FeedMessage,
    StopTimeUpdate,
    TripUpdate,
    VehiclePosition,
)


def _direction_id(trip) -> int | None:
    if not trip.HasField("direction_id"):
        return None
    value = int(trip.direction_id)
    return value if value in (0, 1) else None


def _event_time(stu, name: str) -> int | None:
    if not stu.HasField(name):
        return None
    event = getattr(stu, name)
    if not event.HasField("time") or int(event.time) <= 0:
        return None
    return int(event.time)


def _trip_update(tu) -> TripUpdate:
    trip_id = None
    direction_id = None
    if tu.HasField("trip"):
        trip_id = tu.trip.trip_id or None
        direction_id = _direction_id(tu.trip)

    return TripUpdate(
        trip_id=trip_id,
        direction_id=direction_id,
        stop_time_updates=tuple(
            StopTimeUpdate(
                stop_id=stu.stop_id or None,
                arrival_time=_event_time(stu, "arrival"),
                departure_time=_event_time(stu, "departure"),
            )
            for stu in tu.stop_time_update
        ),
    )


def _vehicle(v) -> VehiclePosition:
    trip_id = None
    direction_id = None
    if v.HasField("trip"):
        trip_id = v.trip.trip_id or None
        direction_id = _direction_id(v.trip)

    vehicle_id = None
    if v.HasField("vehicle"):
        vehicle_id = v.vehicle.id or None

    lat = lon = bearing = None
    if v.HasField("position"):
        pos = v.position
        lat = float(pos.latitude)
        lon = float(pos.longitude)
        bearing = float(pos.bearing) if pos.HasField("bearing") else None

    return VehiclePosition(
        vehicle_id=vehicle_id,
        trip_id=trip_id,
        direction_id=direction_id,
        lat=lat,
        lon=lon,
        bearing=bearing,
        stop_id=v.stop_id or None,
    )


@dataclass(slots=True)
class ProtobufFeedDecoder(IFeedDecoder):
    """Decodes GTFS-Realtime protobuf payloads into domain FeedMessages."""

    def decode(self, raw: bytes) -> FeedMessage:
        feed = gtfs_realtime_pb2.FeedMessage()
        try:
            feed.ParseFromString(raw)
        except (DecodeError, ValueError) as exc:
            raise DecodeFailure(f"Invalid GTFS-RT payload: {exc}") from exc

        entities: list[FeedEntity] = []
        for ent in feed.entity:
            entities.append(
                FeedEntity(
                    id=ent.id,
                    trip_update=(
                        _trip_update(ent.trip_update)
                        if ent.HasField("trip_update")
                        else None
                    ),
                    vehicle=_vehicle(ent.vehicle) if ent.HasField("vehicle") else None,
                )
            )

        timestamp = None
        if feed.header.HasField("timestamp") and int(feed.header.timestamp) > 0:
            timestamp = int(feed.header.timestamp)

        return FeedMessage(timestamp=timestamp, entities=tuple(entities))
