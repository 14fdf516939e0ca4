"""Arrival-ordered delivery of concurrently produced results."""

import asyncio
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class _Slot(NamedTuple):
    result: object
    error: BaseException | None


class ReorderBuffer(Generic[T]):
    """
    Indexed reorder buffer keyed by arrival sequence number.

    Producers ``reserve()`` a sequence number when work arrives and later
    ``put()`` or ``put_error()`` its outcome in any order. The single
    consumer iterates outcomes strictly in sequence order; an error is
    raised at its own position, after every earlier result was delivered.
    Closing the buffer marks the end of the sequence, optionally with a
    terminal error raised once everything before it is drained.
    """

    def __init__(self) -> None:
        self._ready: dict[int, _Slot] = {}
        self._issued = 0
        self._next_seq = 0
        self._end: int | None = None
        self._end_error: BaseException | None = None
        self._changed = asyncio.Event()

    @property
    def pending(self) -> int:
        """Sequence numbers issued but not yet delivered."""
        return self._issued - self._next_seq

    @property
    def closed(self) -> bool:
        return self._end is not None

    def reserve(self) -> int:
        """Allocate the next arrival sequence number."""
        if self._end is not None:
            raise RuntimeError("ReorderBuffer is closed")
        seq = self._issued
        self._issued += 1
        return seq

    def _store(self, seq: int, slot: _Slot) -> None:
        if not self._next_seq <= seq < self._issued:
            raise KeyError(f"sequence {seq} was not reserved or was already delivered")
        if seq in self._ready:
            raise KeyError(f"sequence {seq} already completed")
        self._ready[seq] = slot
        self._changed.set()

    def put(self, seq: int, result: T) -> None:
        self._store(seq, _Slot(result, None))

    def put_error(self, seq: int, error: BaseException) -> None:
        self._store(seq, _Slot(None, error))

    def close(self, error: BaseException | None = None) -> None:
        """No more reservations; deliver ``error`` after the last reserved result."""
        if self._end is None:
            self._end = self._issued
            self._end_error = error
            self._changed.set()

    async def get(self) -> T:
        """
        Wait for the next outcome in arrival order.

        Raises:
            StopAsyncIteration: When closed and fully drained.
        """
        while True:
            slot = self._ready.pop(self._next_seq, None)
            if slot is not None:
                self._next_seq += 1
                if slot.error is not None:
                    raise slot.error
                return slot.result  # type: ignore[return-value]

            if self._end is not None and self._next_seq >= self._end:
                if self._end_error is not None:
                    error, self._end_error = self._end_error, None
                    raise error
                raise StopAsyncIteration

            self._changed.clear()
            await self._changed.wait()

    def __aiter__(self) -> "ReorderBuffer[T]":
        return self

    async def __anext__(self) -> T:
        return await self.get()
