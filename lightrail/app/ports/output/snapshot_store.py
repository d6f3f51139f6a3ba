from __future__ import annotations

from abc import ABC, abstractmethod


class ISnapshotStore(ABC):
    """Port for exporting the latest raw feed payload for inspection."""

    @abstractmethod
    def save(self, raw: bytes) -> None:
        raise NotImplementedError
