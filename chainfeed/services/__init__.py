"""Pipeline services package."""

from chainfeed.services.ingester import BlockIngester
from chainfeed.services.ordering import ReorderBuffer
from chainfeed.services.subscription import SubscriptionBinding, SubscriptionRouter
from chainfeed.services.transformer import TransactionTransformer

__all__ = [
    "BlockIngester",
    "ReorderBuffer",
    "SubscriptionBinding",
    "SubscriptionRouter",
    "TransactionTransformer",
]
