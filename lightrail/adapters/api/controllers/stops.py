from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from lightrail.adapters.api.dependencies import (
    Services,
    get_arrival_service,
    get_services,
    get_stop_resolver,
)
from lightrail.adapters.api.schemas.stops import (
    ArrivalSchema,
    DeparturesResponseSchema,
    StopFullSchema,
    StopSchema,
)
from lightrail.app.services.arrival_service import ArrivalService
from lightrail.app.services.stop_resolver import StopResolver
from lightrail.domain.algorithms.headway import headway_fallback_arrivals
from lightrail.domain.models import Arrival

router = APIRouter(prefix="/api", tags=["stops"])


def _arrival_to_schema(a: Arrival) -> ArrivalSchema:
    return ArrivalSchema(
        epoch_seconds=a.epoch_seconds,
        seconds_away=a.seconds_away,
        source=a.source,
        direction_id=a.direction_id,
    )


@router.get("/stops", response_model=list[StopSchema])
async def list_stops(
    resolver: StopResolver = Depends(get_stop_resolver),
) -> list[StopSchema]:
    return [StopSchema(id=s.id, name=s.name) for s in await resolver.resolve_stops()]


@router.get("/stops-full", response_model=list[StopFullSchema])
def list_stops_with_coordinates(
    resolver: StopResolver = Depends(get_stop_resolver),
) -> list[StopFullSchema]:
    return [
        StopFullSchema(id=s.id, name=s.name, lat=s.location.lat, lon=s.location.lon)
        for s in resolver.platform_stops()
        if s.location is not None
    ]


@router.get("/departures", response_model=DeparturesResponseSchema)
async def next_departures(
    stop_id: str | None = Query(default=None, alias="stopId"),
    arrivals: ArrivalService = Depends(get_arrival_service),
    services: Services = Depends(get_services),
) -> DeparturesResponseSchema:
    stop_id = (stop_id or "").strip()
    if not stop_id:
        raise HTTPException(status_code=400, detail="stopId required")

    nexts = await arrivals.next_arrivals(stop_id)

    headway_s = services.settings.fallback_headway_s
    if not nexts and headway_s:
        nexts = headway_fallback_arrivals(stop_id, int(services.clock()), headway_s)

    items = [_arrival_to_schema(a) for a in nexts]
    return DeparturesResponseSchema(
        stop_id=stop_id, next=items[0] if items else None, nexts=items
    )
