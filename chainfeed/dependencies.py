"""Construction of the pipeline from settings."""

from chainfeed.clients.bitcoin_rpc import BitcoinRPCClient
from chainfeed.clients.zmq_source import ZMQNotificationSource
from chainfeed.config import Settings
from chainfeed.core.gateway import RPCGateway
from chainfeed.core.source import NotificationSource
from chainfeed.services.ingester import BlockIngester
from chainfeed.services.subscription import SourceFactory, SubscriptionRouter
from chainfeed.services.transformer import TransactionTransformer


def create_rpc_gateway(settings: Settings) -> RPCGateway:
    """Create the RPC gateway shared by all pipeline components."""
    return BitcoinRPCClient(
        endpoint=settings.rpc_url.get_secret_value(),
        timeout=settings.rpc_timeout,
        max_concurrent_requests=settings.rpc_max_concurrent_requests,
    )


def create_source_factory(settings: Settings) -> SourceFactory:
    """Create a factory producing one ZMQ source per subscription."""

    def factory() -> NotificationSource:
        return ZMQNotificationSource(
            endpoint=settings.subscription_url,
            timeout=settings.subscription_timeout,
            msg_timeout=settings.subscription_msg_timeout,
        )

    return factory


def create_subscription_router(
    settings: Settings,
    gateway: RPCGateway | None = None,
    source_factory: SourceFactory | None = None,
) -> SubscriptionRouter:
    """
    Wire the router, ingester and transformer.

    Args:
        settings: Application settings.
        gateway: RPC gateway to use; built from settings if omitted. The
            caller owns it and must close it.
        source_factory: Notification source factory; ZMQ if omitted.
    """
    gateway = gateway or create_rpc_gateway(settings)
    transformer = TransactionTransformer(gateway, currency_symbol=settings.currency_symbol)
    ingester = BlockIngester(gateway, transformer)
    return SubscriptionRouter.for_blocks(source_factory or create_source_factory(settings), ingester)
