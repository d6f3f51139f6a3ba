from __future__ import annotations


class FeedError(Exception):
    """Base exception for a feed refresh that produced no usable snapshot."""


class FetchFailure(FeedError):
    """Raised when the upstream feed could not be downloaded.

    Carries either the HTTP status code of a non-success response or the
    underlying network error.
    """

    def __init__(
        self, *, status_code: int | None = None, cause: BaseException | None = None
    ) -> None:
        self.status_code = status_code
        self.cause = cause
        if status_code is not None:
            message = f"GTFS-RT fetch failed: {status_code}"
        elif cause is not None:
            message = f"GTFS-RT fetch failed: {type(cause).__name__}: {cause}"
        else:
            message = "GTFS-RT fetch failed"
        super().__init__(message)


class DecodeFailure(FeedError):
    """Raised when a payload is not a valid GTFS-Realtime FeedMessage."""


class SourceUnavailable(Exception):
    """Raised when the static stop reference table is missing or malformed."""
