from .feed import DecodeFailure, FeedError, FetchFailure, SourceUnavailable

__all__ = [
    "DecodeFailure",
    "FeedError",
    "FetchFailure",
    "SourceUnavailable",
]
