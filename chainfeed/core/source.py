"""Abstract notification source interface."""

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class NotificationSource(ABC):
    """Abstract base class for node pub/sub feeds."""

    @property
    @abstractmethod
    def endpoint(self) -> str:
        """Feed endpoint identifier."""
        ...

    @abstractmethod
    def subscribe(self, topic: str) -> AsyncIterator[str]:
        """
        Subscribe to a node topic.

        Args:
            topic: Node topic name (e.g. 'hashblock').

        Returns:
            Lazy, unbounded async iterator of payloads. It cannot be
            restarted once exhausted or closed.

        Raises:
            SubscriptionError: If the feed fails while reading.
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close the feed connection."""
        ...
