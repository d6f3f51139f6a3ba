from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable

from lightrail.domain.algorithms.arrivals import MAX_ARRIVALS, rank_next_arrivals
from lightrail.domain.exceptions import FeedError
from lightrail.domain.models import Arrival

from .feed_cache import FeedCache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ArrivalService:
    """Next real-time arrivals per direction for a stop.

    Never raises: a missing, failing or malformed feed yields an empty result.
    """

    feed_cache: FeedCache
    clock: Callable[[], float] = time.time
    limit: int = MAX_ARRIVALS

    async def next_arrivals(self, stop_id: str) -> tuple[Arrival, ...]:
        try:
            feed = await self.feed_cache.get_feed()
            if feed is None:
                return ()

            if not feed.has_trip_updates:
                logger.warning("Feed appears not to contain TripUpdates")
                return ()

            now = int(self.clock())
            return rank_next_arrivals(feed, stop_id, now, limit=self.limit)
        except FeedError as exc:
            logger.warning("No realtime data for stop %s: %s", stop_id, exc)
            return ()
        except Exception:
            logger.exception("Failed to compute arrivals for stop %s", stop_id)
            return ()
