from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Mapping

from lightrail.app.ports.output import IFeedDecoder, IFeedFetcher, ISnapshotStore
from lightrail.domain.exceptions import DecodeFailure, FetchFailure
from lightrail.domain.models import FeedMessage, FeedSnapshot

from .single_flight import SingleFlight

logger = logging.getLogger(__name__)

DEFAULT_FEED_TTL_S = 15.0


@dataclass(slots=True)
class FeedCache:
    """Owns the single decoded feed snapshot shared by every request.

    - A snapshot younger than `ttl_s` is served without network access.
    - Expired or missing snapshots are refreshed through one shared
      in-flight fetch (single flight); concurrent callers share its outcome.
    - A failed refresh raises FetchFailure / DecodeFailure and leaves the
      previous snapshot in place, but an expired snapshot is never served.
    - With no upstream url configured every call returns None.
    """

    fetcher: IFeedFetcher
    decoder: IFeedDecoder
    url: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    ttl_s: float = DEFAULT_FEED_TTL_S
    clock: Callable[[], float] = time.time
    snapshot_store: ISnapshotStore | None = None

    _snapshot: FeedSnapshot | None = field(default=None, init=False, repr=False)
    _invalidated: bool = field(default=False, init=False, repr=False)
    _flight: SingleFlight[FeedMessage] = field(
        default_factory=SingleFlight, init=False, repr=False
    )

    @property
    def is_configured(self) -> bool:
        return bool((self.url or "").strip())

    def raw_bytes(self) -> bytes | None:
        snapshot = self._snapshot
        return snapshot.raw_bytes if snapshot is not None else None

    def fetched_at(self) -> float | None:
        snapshot = self._snapshot
        return snapshot.fetched_at if snapshot is not None else None

    async def get_feed(self) -> FeedMessage | None:
        if not self.is_configured:
            return None

        snapshot = self._snapshot
        if snapshot is not None and self._is_fresh(snapshot):
            return snapshot.message

        return await self._flight.run(self._refresh)

    async def force_refresh(self) -> FeedMessage | None:
        """Refresh now regardless of TTL.

        The current snapshot is marked stale first, so a failed forced
        refresh is not masked by the previous value on later reads.
        """

        if not self.is_configured:
            return None

        self._invalidated = True
        return await self._flight.run(self._refresh)

    def _is_fresh(self, snapshot: FeedSnapshot) -> bool:
        if self._invalidated:
            return False
        return (self.clock() - snapshot.fetched_at) < self.ttl_s

    async def _refresh(self) -> FeedMessage:
        url = (self.url or "").strip()
        started_at = self.clock()

        try:
            raw = await self.fetcher.fetch(url, dict(self.headers))
        except FetchFailure as exc:
            logger.warning("Feed refresh failed: %s", exc)
            raise

        try:
            message = self.decoder.decode(raw)
        except DecodeFailure as exc:
            logger.warning("Feed refresh produced an undecodable payload: %s", exc)
            raise

        installed = self._install(
            FeedSnapshot(message=message, raw_bytes=bytes(raw), fetched_at=started_at)
        )
        logger.info(
            "Feed refreshed: %s entities, %s bytes",
            len(installed.message.entities),
            len(installed.raw_bytes),
        )
        self._persist(installed.raw_bytes)
        return installed.message

    def _install(self, snapshot: FeedSnapshot) -> FeedSnapshot:
        current = self._snapshot
        if current is not None and snapshot.fetched_at < current.fetched_at:
            logger.warning(
                "Discarding feed fetched at %s; cached snapshot is newer (%s)",
                snapshot.fetched_at,
                current.fetched_at,
            )
            return current

        self._snapshot = snapshot
        self._invalidated = False
        return snapshot

    def _persist(self, raw: bytes) -> None:
        if self.snapshot_store is None:
            return
        loop = asyncio.get_running_loop()
        loop.run_in_executor(None, self._save_snapshot, raw)

    def _save_snapshot(self, raw: bytes) -> None:
        store = self.snapshot_store
        if store is None:
            return
        try:
            store.save(raw)
        except Exception as exc:
            logger.debug("Raw feed snapshot not persisted: %s", exc)
