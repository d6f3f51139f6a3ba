from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from lightrail.domain.exceptions import FeedError
from lightrail.domain.models import VehiclePosition

from .feed_cache import FeedCache

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class VehicleService:
    feed_cache: FeedCache

    async def list_vehicles(self) -> tuple[VehiclePosition, ...]:
        """Vehicles with a known position, in feed order."""

        try:
            feed = await self.feed_cache.get_feed()
        except FeedError as exc:
            logger.warning("Vehicle positions unavailable: %s", exc)
            return ()
        if feed is None:
            return ()

        out: list[VehiclePosition] = []
        for entity in feed.entities:
            v = entity.vehicle
            if v is None or not v.has_position:
                continue
            if not v.vehicle_id:
                v = replace(v, vehicle_id=entity.id)
            out.append(v)
        return tuple(out)
