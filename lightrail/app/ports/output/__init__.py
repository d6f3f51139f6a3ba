from .feed_decoder import IFeedDecoder
from .feed_fetcher import IFeedFetcher
from .snapshot_store import ISnapshotStore
from .stop_reference_repository import IStopReferenceRepository

__all__ = [
    "IFeedDecoder",
    "IFeedFetcher",
    "ISnapshotStore",
    "IStopReferenceRepository",
]
