"""Subscription routing from node notifications to transaction streams."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Awaitable, Callable, Mapping
from contextlib import aclosing
from dataclasses import dataclass
from functools import partial

from chainfeed.constants import SUBSCRIPTION_TOPICS, SubscriptionKind
from chainfeed.core.exceptions import InvalidSubscriptionError
from chainfeed.core.sink import TransactionSink
from chainfeed.core.source import NotificationSource
from chainfeed.models.blockchain import Transaction
from chainfeed.services.ingester import BlockIngester
from chainfeed.services.ordering import ReorderBuffer

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[str], Awaitable[list[Transaction]]]
SourceFactory = Callable[[], NotificationSource]


@dataclass(frozen=True)
class SubscriptionBinding:
    """Node topic and the handler for its payloads."""

    topic: str
    handler: NotificationHandler


class SubscriptionRouter:
    """
    Entry point for consumers.

    Maps subscription names onto node topics and handlers, owns the
    notification source of each stream, and releases results in the order
    the notifications arrived even though handlers run concurrently.
    """

    def __init__(
        self,
        source_factory: SourceFactory,
        bindings: Mapping[SubscriptionKind, SubscriptionBinding],
    ) -> None:
        """
        Initialize the router.

        Args:
            source_factory: Creates a fresh notification source per stream.
            bindings: Supported subscriptions; anything else is rejected.
        """
        self._source_factory = source_factory
        self._bindings = dict(bindings)

    @classmethod
    def for_blocks(cls, source_factory: SourceFactory, ingester: BlockIngester) -> "SubscriptionRouter":
        """Router serving the transactions subscription from hashblock."""
        topic = SUBSCRIPTION_TOPICS[SubscriptionKind.TRANSACTIONS].name
        return cls(
            source_factory,
            {SubscriptionKind.TRANSACTIONS: SubscriptionBinding(topic, ingester.ingest)},
        )

    @property
    def supported_subscriptions(self) -> list[str]:
        return [kind.value for kind in self._bindings]

    def resolve(self, name: str) -> SubscriptionBinding:
        """
        Look up the binding for a subscription name.

        Raises:
            InvalidSubscriptionError: If the name is unknown or not bound.
        """
        try:
            kind = SubscriptionKind(name)
        except ValueError:
            raise InvalidSubscriptionError(name) from None

        binding = self._bindings.get(kind)
        if binding is None:
            raise InvalidSubscriptionError(name)
        return binding

    def subscribe(self, name: str) -> AsyncGenerator[Transaction, None]:
        """
        Open a transaction stream.

        The name is validated immediately; the notification source is only
        created once the stream is iterated.

        Args:
            name: Subscription name, e.g. 'transactions'.

        Returns:
            Async stream of transactions in notification arrival order. It
            raises whatever error a notification's processing produced, at
            that notification's position.

        Raises:
            InvalidSubscriptionError: If the name is not supported.
        """
        binding = self.resolve(name)
        logger.info(f"[Router] Subscription '{name}' -> topic '{binding.topic}'")
        return self._stream(name, binding)

    async def run(self, name: str, sink: TransactionSink) -> int:
        """
        Pump a subscription into a sink until the source ends.

        Returns:
            Number of transactions emitted.
        """
        count = 0
        async with aclosing(self.subscribe(name)) as stream:
            async for transaction in stream:
                await sink.emit(transaction)
                count += 1
        return count

    async def _stream(self, name: str, binding: SubscriptionBinding) -> AsyncGenerator[Transaction, None]:
        source = self._source_factory()
        buffer: ReorderBuffer[list[Transaction]] = ReorderBuffer()
        inflight: set[asyncio.Task] = set()
        pump = asyncio.create_task(self._pump(source, binding, buffer, inflight))

        try:
            async for transactions in buffer:
                for transaction in transactions:
                    yield transaction
        finally:
            pump.cancel()
            for task in list(inflight):
                task.cancel()
            await asyncio.gather(pump, *inflight, return_exceptions=True)
            await source.close()
            logger.info(f"[Router] Subscription '{name}' closed")

    async def _pump(
        self,
        source: NotificationSource,
        binding: SubscriptionBinding,
        buffer: ReorderBuffer[list[Transaction]],
        inflight: set[asyncio.Task],
    ) -> None:
        """Start a handler task per notification, tagged with its arrival number."""
        try:
            async for payload in source.subscribe(binding.topic):
                seq = buffer.reserve()
                logger.debug(f"[Router] Notification #{seq} on '{binding.topic}': {payload[:16]}...")
                task = asyncio.create_task(binding.handler(payload))
                inflight.add(task)
                task.add_done_callback(partial(self._settle, buffer, inflight, seq))
        except Exception as e:
            logger.error(f"[Router] Notification source {source.endpoint} failed: {e!r}")
            buffer.close(e)
        else:
            logger.info(f"[Router] Notification source {source.endpoint} ended")
            buffer.close()

    @staticmethod
    def _settle(
        buffer: ReorderBuffer[list[Transaction]],
        inflight: set[asyncio.Task],
        seq: int,
        task: asyncio.Task,
    ) -> None:
        inflight.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.error(f"[Router] Notification #{seq} failed: {error!r}")
            buffer.put_error(seq, error)
        else:
            buffer.put(seq, task.result())
