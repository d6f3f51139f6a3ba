from __future__ import annotations

import logging
from dataclasses import dataclass

from lightrail.domain.exceptions import FeedError
from lightrail.domain.models import FeedDiagnostics, FeedMessage, TripUpdateSample

from .feed_cache import FeedCache

logger = logging.getLogger(__name__)

MAX_SAMPLE_SIZE = 50
SAMPLE_STOP_TIME_UPDATES = 3


@dataclass(slots=True)
class FeedDiagnosticsService:
    """Read-only views of the cached feed used to align stop ids."""

    feed_cache: FeedCache

    async def observed_stop_ids(self) -> FeedDiagnostics:
        feed = await self._feed()
        if feed is None:
            return FeedDiagnostics(feed_type="Unknown")
        return FeedDiagnostics(feed_type=feed.feed_type, stop_ids=feed.stop_ids())

    async def sample_trip_updates(self, n: int = 5) -> tuple[TripUpdateSample, ...]:
        n = max(1, min(MAX_SAMPLE_SIZE, int(n)))
        feed = await self._feed()
        if feed is None:
            return ()

        items: list[TripUpdateSample] = []
        for entity, tu in feed.trip_updates():
            items.append(
                TripUpdateSample(
                    entity_id=entity.id,
                    trip_id=tu.trip_id,
                    direction_id=tu.direction_id,
                    stop_time_updates=tu.stop_time_updates[:SAMPLE_STOP_TIME_UPDATES],
                )
            )
            if len(items) >= n:
                break
        return tuple(items)

    async def _feed(self) -> FeedMessage | None:
        try:
            return await self.feed_cache.get_feed()
        except FeedError as exc:
            logger.warning("Feed diagnostics unavailable: %s", exc)
            return None
