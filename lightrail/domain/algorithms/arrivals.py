from __future__ import annotations

from lightrail.domain.models import Arrival, FeedMessage

MAX_ARRIVALS = 2


def _direction_rank(direction_id: int | None) -> int:
    # Ties on seconds_away resolve as direction 0, 1, then unknown.
    return 2 if direction_id is None else int(direction_id)


def earliest_by_direction(
    feed: FeedMessage, stop_id: str, now: int
) -> dict[int | None, int]:
    """Earliest upcoming arrival epoch per direction for `stop_id`.

    Stop ids compare case-insensitively. Updates without an arrival time, or
    with one strictly before `now`, are ignored. Trips without a direction
    share the `None` bucket.
    """

    target = str(stop_id).upper()
    best: dict[int | None, int] = {}

    for _, trip_update in feed.trip_updates():
        direction = trip_update.direction_id
        for stu in trip_update.stop_time_updates:
            if not stu.stop_id or str(stu.stop_id).upper() != target:
                continue
            t = stu.arrival_time
            if not t or t < now:
                continue
            prev = best.get(direction)
            if prev is None or t < prev:
                best[direction] = int(t)

    return best


def rank_next_arrivals(
    feed: FeedMessage, stop_id: str, now: int, *, limit: int = MAX_ARRIVALS
) -> tuple[Arrival, ...]:
    """Soonest arrival per direction at a stop, ordered by time to arrival."""

    arrivals = [
        Arrival(
            epoch_seconds=epoch,
            seconds_away=epoch - now,
            source="realtime",
            direction_id=direction,
        )
        for direction, epoch in earliest_by_direction(feed, stop_id, now).items()
    ]
    arrivals = [a for a in arrivals if a.seconds_away >= 0]
    arrivals.sort(key=lambda a: (a.seconds_away, _direction_rank(a.direction_id)))
    return tuple(arrivals[: max(0, limit)])
