from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Depends, Request

from lightrail.adapters.config import Settings
from lightrail.adapters.persistence import (
    LocalFileSnapshotStore,
    LocalStopReferenceRepository,
    S3SnapshotStore,
)
from lightrail.adapters.realtime import HttpFeedFetcher, ProtobufFeedDecoder
from lightrail.app.ports.output import (
    IFeedDecoder,
    IFeedFetcher,
    ISnapshotStore,
    IStopReferenceRepository,
)
from lightrail.app.services.arrival_service import ArrivalService
from lightrail.app.services.feed_cache import FeedCache
from lightrail.app.services.feed_diagnostics_service import FeedDiagnosticsService
from lightrail.app.services.stop_resolver import StopResolver
from lightrail.app.services.vehicle_service import VehicleService


@dataclass(slots=True)
class Services:
    """Process-wide service graph, owned by the FastAPI app (app.state)."""

    settings: Settings
    clock: Callable[[], float]
    feed_cache: FeedCache
    stop_resolver: StopResolver
    arrival_service: ArrivalService
    vehicle_service: VehicleService
    diagnostics_service: FeedDiagnosticsService


def _snapshot_store(settings: Settings) -> ISnapshotStore | None:
    if settings.snapshot_bucket:
        return S3SnapshotStore(
            bucket=settings.snapshot_bucket,
            key=settings.snapshot_key,
            region=settings.aws_region,
            endpoint_url=settings.aws_endpoint_url,
        )
    if settings.snapshot_path:
        return LocalFileSnapshotStore(path=settings.snapshot_path)
    return None


def build_services(
    settings: Settings,
    *,
    fetcher: IFeedFetcher | None = None,
    decoder: IFeedDecoder | None = None,
    reference_repository: IStopReferenceRepository | None = None,
    snapshot_store: ISnapshotStore | None = None,
    clock: Callable[[], float] = time.time,
) -> Services:
    feed_cache = FeedCache(
        fetcher=fetcher or HttpFeedFetcher(timeout_s=settings.timeout_s),
        decoder=decoder or ProtobufFeedDecoder(),
        url=settings.trip_updates_url,
        headers=settings.feed_headers(),
        ttl_s=settings.feed_ttl_s,
        clock=clock,
        snapshot_store=snapshot_store or _snapshot_store(settings),
    )
    stop_resolver = StopResolver(
        reference_repository=(
            reference_repository or LocalStopReferenceRepository(settings.stops_path)
        ),
        feed_cache=feed_cache,
        clock=clock,
    )
    return Services(
        settings=settings,
        clock=clock,
        feed_cache=feed_cache,
        stop_resolver=stop_resolver,
        arrival_service=ArrivalService(feed_cache=feed_cache, clock=clock),
        vehicle_service=VehicleService(feed_cache=feed_cache),
        diagnostics_service=FeedDiagnosticsService(feed_cache=feed_cache),
    )


def get_services(request: Request) -> Services:
    return request.app.state.services


def get_feed_cache(services: Services = Depends(get_services)) -> FeedCache:
    return services.feed_cache


def get_stop_resolver(services: Services = Depends(get_services)) -> StopResolver:
    return services.stop_resolver


def get_arrival_service(services: Services = Depends(get_services)) -> ArrivalService:
    return services.arrival_service


def get_vehicle_service(services: Services = Depends(get_services)) -> VehicleService:
    return services.vehicle_service


def get_diagnostics_service(
    services: Services = Depends(get_services),
) -> FeedDiagnosticsService:
    return services.diagnostics_service
