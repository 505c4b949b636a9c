"""
Fan-in combinator for independent async relation streams.

merge_streams() runs each source on its own asyncio task, all pushing into
one shared queue. A pending-producer counter acts as the join barrier: the
merged stream ends only after every producer has signalled completion.

Cancellation is explicit. Closing the merged stream early (breaking out of
``async for``, calling ``aclose()``, or cancelling the consuming task)
cancels and awaits every producer, so none is left blocked on the queue.
A producer failure is re-raised in the consumer and the remaining
producers are cancelled.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Item(Generic[T]):
    value: T


@dataclass(frozen=True)
class _Failed:
    error: Exception


_DONE = object()


async def _drain(source: AsyncIterator[Any], queue: asyncio.Queue) -> None:
    """Forward every item of ``source`` into ``queue``, then signal done."""
    try:
        async for value in source:
            await queue.put(_Item(value))
    except Exception as e:
        await queue.put(_Failed(e))
        return
    finally:
        aclose = getattr(source, "aclose", None)
        if aclose is not None:
            await aclose()
    await queue.put(_DONE)


async def merge_streams(*sources: AsyncIterator[T], queue_size: int = 0) -> AsyncIterator[T]:
    """
    Merge several finite async iterators into one.

    Items are yielded in arrival order; no ordering between sources is
    guaranteed.

    Args:
        *sources: Async iterators to drain concurrently
        queue_size: Bound on buffered items (0 = unbounded)

    Yields:
        Every item produced by every source, exactly once.

    Raises:
        Exception: The first exception raised by any source.
    """
    queue: asyncio.Queue = asyncio.Queue(maxsize=queue_size)
    producers = [asyncio.create_task(_drain(source, queue)) for source in sources]
    pending = len(producers)

    try:
        while pending:
            entry = await queue.get()
            if entry is _DONE:
                pending -= 1
            elif isinstance(entry, _Failed):
                raise entry.error
            else:
                yield entry.value
    finally:
        cancelled = 0
        for task in producers:
            if not task.done():
                task.cancel()
                cancelled += 1
        await asyncio.gather(*producers, return_exceptions=True)
        if cancelled:
            logger.debug(f"merge_streams closed early, cancelled {cancelled} producer(s)")
