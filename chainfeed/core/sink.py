"""Abstract transaction sink interface."""

from abc import ABC, abstractmethod

from chainfeed.models.blockchain import Transaction


class TransactionSink(ABC):
    """Push-only destination for canonical transactions."""

    @abstractmethod
    async def emit(self, transaction: Transaction) -> None:
        """Deliver one transaction. Called in stream order."""
        ...
