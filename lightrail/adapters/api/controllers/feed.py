from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from lightrail.adapters.api.dependencies import get_diagnostics_service, get_feed_cache
from lightrail.adapters.api.schemas.feed import (
    RefreshResponseSchema,
    StopIdsResponseSchema,
    StopTimeUpdateSchema,
    TripUpdateSampleSchema,
)
from lightrail.app.services.feed_cache import FeedCache
from lightrail.app.services.feed_diagnostics_service import FeedDiagnosticsService
from lightrail.domain.exceptions import FeedError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["feed"])


@router.post("/refresh", response_model=RefreshResponseSchema)
async def refresh_feed(
    feed_cache: FeedCache = Depends(get_feed_cache),
) -> RefreshResponseSchema | JSONResponse:
    try:
        await feed_cache.force_refresh()
    except FeedError as exc:
        logger.warning("Forced refresh failed: %s", exc)
        return JSONResponse(status_code=500, content={"ok": False})

    fetched_at = feed_cache.fetched_at()
    return RefreshResponseSchema(
        ok=True,
        refreshed_at=(
            datetime.fromtimestamp(fetched_at, tz=timezone.utc)
            if fetched_at is not None
            else None
        ),
    )


@router.get("/feed.pb")
def latest_raw_feed(feed_cache: FeedCache = Depends(get_feed_cache)) -> Response:
    raw = feed_cache.raw_bytes()
    if raw is None:
        return PlainTextResponse("Feed unavailable", status_code=503)
    return Response(content=raw, media_type="application/octet-stream")


@router.get("/rt-sample", response_model=list[TripUpdateSampleSchema])
async def trip_update_sample(
    n: int = Query(default=5),
    service: FeedDiagnosticsService = Depends(get_diagnostics_service),
) -> list[TripUpdateSampleSchema]:
    return [
        TripUpdateSampleSchema(
            id=s.entity_id,
            trip_id=s.trip_id,
            direction_id=s.direction_id,
            stop_time_updates=[
                StopTimeUpdateSchema(
                    stop_id=stu.stop_id,
                    arrival=stu.arrival_time,
                    departure=stu.departure_time,
                )
                for stu in s.stop_time_updates
            ],
        )
        for s in await service.sample_trip_updates(n)
    ]


@router.get("/rt-stop-ids", response_model=StopIdsResponseSchema)
async def observed_stop_ids(
    service: FeedDiagnosticsService = Depends(get_diagnostics_service),
) -> StopIdsResponseSchema:
    diagnostics = await service.observed_stop_ids()
    return StopIdsResponseSchema(
        type=diagnostics.feed_type, stop_ids=list(diagnostics.stop_ids)
    )
