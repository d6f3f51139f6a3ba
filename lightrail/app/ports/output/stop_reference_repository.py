from __future__ import annotations

from abc import ABC, abstractmethod

from lightrail.domain.models import Stop

MIN_STOP_COLUMNS = 6


class IStopReferenceRepository(ABC):
    """Port for the static stop reference table (GTFS stops.txt)."""

    @abstractmethod
    def load_platform_stops(
        self, min_columns: int = MIN_STOP_COLUMNS
    ) -> tuple[Stop, ...]:
        """Platform rows with at least `min_columns` columns, in file order.

        Raises SourceUnavailable.
        """

        raise NotImplementedError
