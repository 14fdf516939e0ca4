"""Test configuration and fixtures."""

from collections.abc import Iterable

import pytest

from chainfeed.services.ingester import BlockIngester
from chainfeed.services.subscription import SubscriptionRouter
from chainfeed.services.transformer import TransactionTransformer
from tests.fakes import FakeRPCGateway, FakeSourceFactory


@pytest.fixture
def gateway() -> FakeRPCGateway:
    """Provide an empty fake node."""
    return FakeRPCGateway()


@pytest.fixture
def transformer(gateway: FakeRPCGateway) -> TransactionTransformer:
    """Provide a transformer with the default currency."""
    return TransactionTransformer(gateway)


@pytest.fixture
def ingester(gateway: FakeRPCGateway, transformer: TransactionTransformer) -> BlockIngester:
    """Provide a block ingester on the fake node."""
    return BlockIngester(gateway, transformer)


@pytest.fixture
def make_router(ingester: BlockIngester):
    """Build a router fed by the given notifications."""

    def build(payloads: Iterable[str] = (), error: Exception | None = None) -> tuple[SubscriptionRouter, FakeSourceFactory]:
        factory = FakeSourceFactory(payloads, error)
        return SubscriptionRouter.for_blocks(factory, ingester), factory

    return build
