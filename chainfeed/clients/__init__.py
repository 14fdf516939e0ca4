"""Node client implementations package."""

from chainfeed.clients.bitcoin_rpc import BitcoinRPCClient
from chainfeed.clients.zmq_source import ZMQNotificationSource

__all__ = [
    "BitcoinRPCClient",
    "ZMQNotificationSource",
]
