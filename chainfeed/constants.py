"""Node constants and subscription configuration."""

from enum import Enum
from typing import NamedTuple

DEFAULT_CURRENCY = "BTC"

# getblock verbosity 2 embeds fully decoded transactions instead of txids
FULL_VERBOSITY = 2

# Bitcoin Core RPC_INVALID_ADDRESS_OR_KEY, returned by gettransaction for
# transactions the wallet does not know about
RPC_INVALID_ADDRESS_OR_KEY = -5


class TransactionType(str, Enum):
    """Well-known wallet categories reported by the node."""

    RECEIVE = "receive"
    SEND = "send"
    INTERNAL = "internal"


class SubscriptionKind(str, Enum):
    """Subscriptions exposed to consumers."""

    TRANSACTIONS = "transactions"


class NodeTopic(NamedTuple):
    """ZMQ topic published by the node for a subscription."""

    name: str
    description: str


# Consumer-facing subscription -> node pub/sub topic
SUBSCRIPTION_TOPICS: dict[SubscriptionKind, NodeTopic] = {
    SubscriptionKind.TRANSACTIONS: NodeTopic("hashblock", "Hash of every newly connected block"),
}
