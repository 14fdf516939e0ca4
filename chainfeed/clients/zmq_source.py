"""ZeroMQ notification source for bitcoind -zmqpub* feeds."""

import asyncio
import logging
from collections.abc import AsyncIterator
from typing import NamedTuple

import zmq
import zmq.asyncio

from chainfeed.core.exceptions import SubscriptionError, SubscriptionTimeoutError
from chainfeed.core.source import NotificationSource

logger = logging.getLogger(__name__)

SEQUENCE_MODULUS = 2**32


class Notification(NamedTuple):
    """One decoded pub/sub message."""

    topic: str
    payload: str
    sequence: int | None


def parse_notification(frames: list[bytes]) -> Notification:
    """
    Decode a multipart message published by the node.

    bitcoind sends ``[topic, body, sequence]`` where the sequence is a
    4-byte little-endian counter per topic. The body is returned hex encoded,
    which for hashblock is the block hash as RPC expects it.

    Raises:
        ValueError: If the message does not have the expected shape.
    """
    if len(frames) < 2:
        raise ValueError(f"expected at least 2 frames, got {len(frames)}")

    topic = frames[0].decode("ascii", errors="replace")
    sequence = None
    if len(frames) >= 3:
        if len(frames[2]) != 4:
            raise ValueError(f"sequence frame must be 4 bytes, got {len(frames[2])}")
        sequence = int.from_bytes(frames[2], "little")

    return Notification(topic=topic, payload=frames[1].hex(), sequence=sequence)


class ZMQNotificationSource(NotificationSource):
    """
    SUB socket reader for a single node topic.

    A source instance serves exactly one subscription; it is closed when the
    iterator finishes or when ``close()`` is called.
    """

    RECEIVE_HIGH_WATER_MARK = 10000

    def __init__(
        self,
        endpoint: str,
        timeout: float | None = None,
        msg_timeout: float | None = None,
        context: zmq.asyncio.Context | None = None,
    ) -> None:
        """
        Initialize the ZMQ source.

        Args:
            endpoint: ZMQ endpoint, e.g. tcp://127.0.0.1:28332.
            timeout: TCP connect timeout in seconds.
            msg_timeout: Maximum seconds to wait for each message.
            context: Shared asyncio context; a private one is created if omitted.
        """
        self._endpoint = endpoint
        self._timeout = timeout
        self._msg_timeout = msg_timeout
        self._owns_context = context is None
        self._context = context or zmq.asyncio.Context()
        self._socket: zmq.asyncio.Socket | None = None
        self._subscribed = False
        self._closed = False

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _open_socket(self, topic: str) -> zmq.asyncio.Socket:
        socket = self._context.socket(zmq.SUB)
        socket.setsockopt(zmq.LINGER, 0)
        socket.setsockopt(zmq.RCVHWM, self.RECEIVE_HIGH_WATER_MARK)
        if self._timeout:
            socket.setsockopt(zmq.CONNECT_TIMEOUT, int(self._timeout * 1000))
        socket.setsockopt(zmq.SUBSCRIBE, topic.encode("ascii"))
        socket.connect(self._endpoint)
        return socket

    async def _receive(self, socket: zmq.asyncio.Socket) -> list[bytes]:
        try:
            if self._msg_timeout is None:
                return await socket.recv_multipart()
            return await asyncio.wait_for(socket.recv_multipart(), self._msg_timeout)
        except asyncio.TimeoutError as e:
            raise SubscriptionTimeoutError(self._endpoint, self._msg_timeout) from e
        except zmq.ZMQError as e:
            raise SubscriptionError(self._endpoint, str(e)) from e

    async def subscribe(self, topic: str) -> AsyncIterator[str]:
        """Yield hex payloads published on ``topic``."""
        if self._closed or self._subscribed:
            raise SubscriptionError(self._endpoint, "source is single-use and already consumed")
        self._subscribed = True

        try:
            self._socket = self._open_socket(topic)
        except zmq.ZMQError as e:
            raise SubscriptionError(self._endpoint, str(e)) from e
        logger.info(f"[ZMQ] Subscribed to '{topic}' on {self._endpoint}")

        last_sequence: int | None = None
        try:
            while True:
                frames = await self._receive(self._socket)
                try:
                    notification = parse_notification(frames)
                except ValueError as e:
                    raise SubscriptionError(self._endpoint, f"malformed message: {e}") from e

                # SUBSCRIBE filters by prefix
                if notification.topic != topic:
                    continue

                if notification.sequence is not None:
                    if last_sequence is not None:
                        expected = (last_sequence + 1) % SEQUENCE_MODULUS
                        if notification.sequence != expected:
                            lost = (notification.sequence - expected) % SEQUENCE_MODULUS
                            logger.warning(
                                f"[ZMQ] Sequence gap on '{topic}': expected {expected}, "
                                f"got {notification.sequence} ({lost} notification(s) lost)"
                            )
                    last_sequence = notification.sequence

                logger.debug(f"[ZMQ] {topic} #{notification.sequence}: {notification.payload[:16]}...")
                yield notification.payload
        finally:
            self._close_socket()

    def _close_socket(self) -> None:
        if self._socket is not None and not self._socket.closed:
            self._socket.close(linger=0)
            logger.debug(f"[ZMQ] Socket to {self._endpoint} closed")
        self._socket = None

    async def close(self) -> None:
        """Close the socket and, when owned, the ZMQ context."""
        if self._closed:
            return
        self._closed = True
        self._close_socket()
        if self._owns_context:
            self._context.term()
        logger.info(f"[ZMQ] Closed subscription to {self._endpoint}")
