"""Core module for base interfaces and abstractions."""

from chainfeed.core.exceptions import (
    BlockProcessingError,
    ChainFeedError,
    InvalidSubscriptionError,
    RPCError,
    RPCResponseError,
    RPCTimeoutError,
    RPCTransportError,
    SubscriptionError,
    SubscriptionTimeoutError,
)
from chainfeed.core.gateway import RPCGateway
from chainfeed.core.sink import TransactionSink
from chainfeed.core.source import NotificationSource

__all__ = [
    "BlockProcessingError",
    "ChainFeedError",
    "InvalidSubscriptionError",
    "NotificationSource",
    "RPCError",
    "RPCGateway",
    "RPCResponseError",
    "RPCTimeoutError",
    "RPCTransportError",
    "SubscriptionError",
    "SubscriptionTimeoutError",
    "TransactionSink",
]
