"""Console entry point: stream wallet transactions to the log."""

import asyncio
import logging

from chainfeed import __version__
from chainfeed.config import get_settings
from chainfeed.constants import SubscriptionKind
from chainfeed.dependencies import create_rpc_gateway, create_subscription_router
from chainfeed.sinks import LoggingSink

logger = logging.getLogger(__name__)


async def run() -> int:
    """Run the transactions subscription until the feed ends."""
    settings = get_settings()
    logger.info(f"Starting chainfeed v{__version__}")
    logger.info(f"Notifications: {settings.subscription_url}")
    logger.info(f"Currency: {settings.currency_symbol}")

    gateway = create_rpc_gateway(settings)
    router = create_subscription_router(settings, gateway=gateway)
    sink = LoggingSink(logging.getLogger("chainfeed.transactions"))
    try:
        return await router.run(SubscriptionKind.TRANSACTIONS.value, sink)
    finally:
        await gateway.close()
        logger.info(f"Emitted {sink.emitted} transaction(s)")


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")


if __name__ == "__main__":
    main()
