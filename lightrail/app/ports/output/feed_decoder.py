from __future__ import annotations

from abc import ABC, abstractmethod

from lightrail.domain.models import FeedMessage


class IFeedDecoder(ABC):
    """Port for turning raw feed bytes into a FeedMessage."""

    @abstractmethod
    def decode(self, raw: bytes) -> FeedMessage:
        """Return the decoded message, or raise DecodeFailure."""

        raise NotImplementedError
