from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable

from lightrail.app.ports.output import IStopReferenceRepository
from lightrail.domain.exceptions import FeedError, SourceUnavailable
from lightrail.domain.models import Stop

from .feed_cache import FeedCache
from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

STOPS_TTL_S = 24 * 60 * 60
STOPS_FULL_MIN_COLUMNS = 7

# Canberra light rail stops, used when neither stops.txt nor the live feed
# yields anything (first run, no feed configured, upstream down).
FALLBACK_STOPS: tuple[Stop, ...] = (
    Stop(id="GUNGAHLIN_PLACE", name="Gungahlin Place"),
    Stop(id="MANNING_CLARK", name="Manning Clark North"),
    Stop(id="KAVANAGH", name="Kavanagh Street"),
    Stop(id="WIMMERA", name="Well Station Drive"),
    Stop(id="SANDY", name="Sandon Street"),
    Stop(id="EPIC", name="EPIC and Racecourse"),
    Stop(id="SWINDEN", name="Swinden Street"),
    Stop(id="DICKSON_INTERCHANGE", name="Dickson Interchange"),
    Stop(id="MACARTHUR", name="Macarthur Avenue"),
    Stop(id="IPIMA", name="Ipima Street"),
    Stop(id="ELDER", name="Elouera Street"),
    Stop(id="ALINGA", name="Alinga Street"),
)


@dataclass(slots=True)
class StopResolver:
    """Resolves the stop list from sources of decreasing reliability.

    1) Platform rows of the static stops.txt table.
    2) Distinct stop ids seen in the live feed's trip updates (name = id).
    3) A hardcoded fallback list.

    The result is cached for a day, independently of the feed cache.
    """

    reference_repository: IStopReferenceRepository
    feed_cache: FeedCache | None = None
    ttl_s: float = STOPS_TTL_S
    clock: Callable[[], float] = time.time
    fallback: tuple[Stop, ...] = FALLBACK_STOPS

    _stops: tuple[Stop, ...] | None = field(default=None, init=False, repr=False)
    _resolved_at: float = field(default=0.0, init=False, repr=False)
    _flight: SingleFlight[tuple[Stop, ...]] = field(
        default_factory=SingleFlight, init=False, repr=False
    )

    async def resolve_stops(self) -> tuple[Stop, ...]:
        stops = self._stops
        if stops is not None and (self.clock() - self._resolved_at) < self.ttl_s:
            return stops
        return await self._flight.run(self._resolve)

    def platform_stops(self) -> tuple[Stop, ...]:
        """Static platform stops that carry coordinates (uncached)."""

        try:
            stops = self.reference_repository.load_platform_stops(
                min_columns=STOPS_FULL_MIN_COLUMNS
            )
        except SourceUnavailable as exc:
            logger.info("Stop reference table unavailable: %s", exc)
            return ()
        return tuple(s for s in stops if s.location is not None)

    async def _resolve(self) -> tuple[Stop, ...]:
        resolved_at = self.clock()

        stops = self._from_reference_table()
        source = "reference table"
        if not stops:
            stops = await self._from_live_feed()
            source = "live feed"
        if not stops:
            stops = self.fallback
            source = "fallback list"

        logger.info("Resolved %s stops from %s", len(stops), source)
        self._stops = stops
        self._resolved_at = resolved_at
        return stops

    def _from_reference_table(self) -> tuple[Stop, ...]:
        try:
            rows = self.reference_repository.load_platform_stops()
        except SourceUnavailable as exc:
            logger.info("Stop reference table unavailable: %s", exc)
            return ()
        return tuple(Stop(id=s.id, name=s.name) for s in rows)

    async def _from_live_feed(self) -> tuple[Stop, ...]:
        if self.feed_cache is None:
            return ()
        try:
            feed = await self.feed_cache.get_feed()
        except FeedError as exc:
            logger.info("Live feed unavailable for stop discovery: %s", exc)
            return ()
        if feed is None:
            return ()
        return tuple(Stop(id=sid, name=sid) for sid in feed.stop_ids())
