from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A platform stop. Identity is `id`; `name` may equal `id` when unknown."""

    id: str
    name: str
    location: GeoPoint | None = None
