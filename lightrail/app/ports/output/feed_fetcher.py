from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping


class IFeedFetcher(ABC):
    """Port for downloading the raw GTFS-Realtime payload."""

    @abstractmethod
    async def fetch(self, url: str, headers: Mapping[str, str]) -> bytes:
        """Return the response body, or raise FetchFailure."""

        raise NotImplementedError
