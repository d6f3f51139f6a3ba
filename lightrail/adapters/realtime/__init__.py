from .http_feed_fetcher import HttpFeedFetcher
from .protobuf_feed_decoder import ProtobufFeedDecoder

__all__ = [
    "HttpFeedFetcher",
    "ProtobufFeedDecoder",
]
