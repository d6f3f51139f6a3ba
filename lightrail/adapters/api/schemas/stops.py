from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, SerializerFunctionWrapHandler, model_serializer


class StopSchema(BaseModel):
    id: str
    name: str


class StopFullSchema(BaseModel):
    id: str
    name: str
    lat: float
    lon: float


class ArrivalSchema(BaseModel):
    epoch_seconds: int
    seconds_away: int
    source: Literal["realtime", "fallback"]
    # Omitted from the payload when the direction is unknown.
    direction_id: int | None = None

    @model_serializer(mode="wrap")
    def _drop_unknown_direction(
        self, handler: SerializerFunctionWrapHandler
    ) -> dict[str, Any]:
        data = handler(self)
        if data.get("direction_id") is None:
            data.pop("direction_id", None)
        return data


class DeparturesResponseSchema(BaseModel):
    stop_id: str
    # `next` is the soonest entry of `nexts`, kept for older clients.
    next: ArrivalSchema | None = None
    nexts: list[ArrivalSchema]
