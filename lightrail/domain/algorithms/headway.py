from __future__ import annotations

from lightrail.domain.models import Arrival

DEFAULT_HEADWAY_S = 360


def stop_hash(stop_id: str) -> int:
    """Stable 32-bit hash of a stop id (djb2-style, multiplier 33)."""

    h = 0
    for ch in str(stop_id or "default"):
        h = (h * 33 + ord(ch)) & 0xFFFFFFFF
    return h


def headway_fallback_arrivals(
    stop_id: str, now: int, headway_s: int = DEFAULT_HEADWAY_S
) -> tuple[Arrival, Arrival]:
    """Schedule-free estimate assuming one service every `headway_s` seconds.

    Direction 0 and 1 are offset by half a headway so that both directions
    do not arrive at the same moment. Offsets are derived from the stop id,
    so a stop always gets the same pattern.
    """

    headway_s = max(1, int(headway_s))
    offset_a = stop_hash(stop_id) % headway_s
    offset_b = (offset_a + headway_s // 2) % headway_s
    window_start = (now // headway_s) * headway_s

    def _at(offset: int, direction_id: int) -> Arrival:
        target = window_start + offset
        if target <= now:
            target += headway_s
        return Arrival(
            epoch_seconds=target,
            seconds_away=target - now,
            source="fallback",
            direction_id=direction_id,
        )

    return _at(offset_a, 0), _at(offset_b, 1)
