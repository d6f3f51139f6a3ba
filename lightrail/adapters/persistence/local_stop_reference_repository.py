from __future__ import annotations

import csv
import os
from dataclasses import dataclass
from pathlib import Path

from lightrail.app.ports.output import IStopReferenceRepository
from lightrail.app.ports.output.stop_reference_repository import MIN_STOP_COLUMNS
from lightrail.domain.exceptions import SourceUnavailable
from lightrail.domain.models import GeoPoint, Stop

DEFAULT_STOPS_PATH = "data/gtfs/stops.txt"

# Positional columns of stops.txt as published for the light rail feed.
COL_ID = 0
COL_NAME = 1
COL_LAT = 2
COL_LON = 3
COL_LOCATION_TYPE = 5


@dataclass(slots=True)
class LocalStopReferenceRepository(IStopReferenceRepository):
    """Loads platform stops from a GTFS stops.txt file.

    Env vars:
      - STOPS_PATH: path to stops.txt (default data/gtfs/stops.txt)

    The header row must begin with `stop_id`; columns are read by position.
    Only rows whose location_type is literally `0` are platforms.
    A missing, unreadable or headerless file raises SourceUnavailable.
    """

    path: str | Path | None = None

    def _path(self) -> Path:
        value = self.path or os.getenv("STOPS_PATH") or DEFAULT_STOPS_PATH
        return Path(value)

    def load_platform_stops(
        self, min_columns: int = MIN_STOP_COLUMNS
    ) -> tuple[Stop, ...]:
        path = self._path()
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as fp:
                rows = [row for row in csv.reader(fp) if any(c.strip() for c in row)]
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            raise SourceUnavailable(f"Cannot read {path}: {exc}") from exc

        if not rows or not rows[0][0].strip().lower().startswith("stop_id"):
            raise SourceUnavailable(f"{path} does not start with a stop_id header")

        min_columns = max(min_columns, COL_LOCATION_TYPE + 1)
        stops: list[Stop] = []
        for row in rows[1:]:
            if len(row) < min_columns:
                continue
            if row[COL_LOCATION_TYPE].strip() != "0":
                continue
            stop_id = row[COL_ID].strip()
            if not stop_id:
                continue
            stops.append(
                Stop(
                    id=stop_id,
                    name=row[COL_NAME].strip() or stop_id,
                    location=GeoPoint.try_parse(row[COL_LAT], row[COL_LON]),
                )
            )
        return tuple(stops)
