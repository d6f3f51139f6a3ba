from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ArrivalSource = Literal["realtime", "fallback"]


@dataclass(frozen=True, slots=True)
class Arrival:
    """Next arrival at a stop for one direction.

    Derived per query from the current feed and the current time; never stored.
    """

    epoch_seconds: int
    seconds_away: int
    source: ArrivalSource = "realtime"
    direction_id: int | None = None
