"""Domain models package."""

from chainfeed.models.blockchain import (
    Block,
    EnrichedTransactionDetail,
    LookupStatus,
    RawBlockTransaction,
    Transaction,
    TransactionDetailEntry,
    TransactionLookup,
)

__all__ = [
    "Block",
    "EnrichedTransactionDetail",
    "LookupStatus",
    "RawBlockTransaction",
    "Transaction",
    "TransactionDetailEntry",
    "TransactionLookup",
]
