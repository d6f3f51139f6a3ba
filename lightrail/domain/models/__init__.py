from .arrival import Arrival, ArrivalSource
from .diagnostics import FeedDiagnostics, TripUpdateSample
from .feed import (
    FeedEntity,
    FeedMessage,
    FeedSnapshot,
    FeedType,
    StopTimeUpdate,
    TripUpdate,
    VehiclePosition,
)
from .geo import GeoPoint
from .stop import Stop

__all__ = [
    "Arrival",
    "ArrivalSource",
    "FeedDiagnostics",
    "FeedEntity",
    "FeedMessage",
    "FeedSnapshot",
    "FeedType",
    "GeoPoint",
    "Stop",
    "StopTimeUpdate",
    "TripUpdate",
    "TripUpdateSample",
    "VehiclePosition",
]
