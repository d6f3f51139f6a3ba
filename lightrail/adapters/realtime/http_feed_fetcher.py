from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping

import httpx

from lightrail.app.ports.output import IFeedFetcher
from lightrail.domain.exceptions import FetchFailure

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpFeedFetcher(IFeedFetcher):
    """Downloads a GTFS-Realtime feed over HTTP.

    Non-2xx responses raise FetchFailure(status_code=...); timeouts, DNS and
    connection errors raise FetchFailure(cause=...).
    """

    timeout_s: float = 10.0
    transport: httpx.AsyncBaseTransport | None = None

    async def fetch(self, url: str, headers: Mapping[str, str]) -> bytes:
        if not url:
            raise ValueError("Feed url must not be empty")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_s,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                resp = await client.get(url, headers=dict(headers))
        except httpx.HTTPError as exc:
            raise FetchFailure(cause=exc) from exc

        if not resp.is_success:
            raise FetchFailure(status_code=resp.status_code)

        content = resp.content
        logger.debug("Fetched %s bytes from %s", len(content), url)
        return content
