from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel


class HealthSchema(BaseModel):
    ok: bool


class RefreshResponseSchema(BaseModel):
    ok: bool
    refreshed_at: datetime | None = None


class StopTimeUpdateSchema(BaseModel):
    stop_id: str | None = None
    arrival: int | None = None
    departure: int | None = None


class TripUpdateSampleSchema(BaseModel):
    id: str
    trip_id: str | None = None
    direction_id: int | None = None
    stop_time_updates: list[StopTimeUpdateSchema]


class StopIdsResponseSchema(BaseModel):
    type: Literal["TripUpdates", "VehiclePositions", "Unknown"]
    stop_ids: list[str]


class VehicleSchema(BaseModel):
    id: str | None = None
    trip_id: str | None = None
    direction_id: int | None = None
    lat: float
    lon: float
    bearing: float | None = None
    stop_id: str | None = None
