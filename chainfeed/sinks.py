"""Transaction sink implementations."""

import logging

from chainfeed.core.sink import TransactionSink
from chainfeed.models.blockchain import Transaction

logger = logging.getLogger(__name__)


class LoggingSink(TransactionSink):
    """Writes each transaction as a JSON log line."""

    def __init__(self, log: logging.Logger | None = None, level: int = logging.INFO) -> None:
        self._log = log or logger
        self._level = level
        self.emitted = 0

    async def emit(self, transaction: Transaction) -> None:
        self.emitted += 1
        self._log.log(self._level, transaction.to_json())
