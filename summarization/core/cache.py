"""
Single-flight memoizing cache shared by every analytical service.

Each slot is keyed by a hashable value (service name, slot kind, config) and
holds the asyncio.Task computing that slot. Concurrent first-requesters for the
same key attach to the same task, so the underlying computation runs exactly
once and every waiter receives the same result object.

Slot discipline:
    - Write-once: a completed slot is never overwritten; a new key creates a new slot.
    - Failed or cancelled computations are evicted so a later request recomputes.
    - invalidate() cancels every in-flight task, clears all slots and bumps the
      generation counter so late completions from the old generation are ignored.

Waiters await the shared task through asyncio.shield: cancelling one waiter
does not cancel the computation other waiters depend on, while cancelling the
computation itself (via invalidate) propagates CancelledError to every waiter.
The cache counts the waiters of each in-flight task. When the last one is
cancelled nobody needs the result any more, so the task is cancelled too; the
CancelledError then reaches the task's own upstream waits and abandons any
upstream slot left without waiters.

Usage:
    cache = SingleFlightCache()
    result = await cache.run(("weekly_elaboration", "properties", config), compute)
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


class SingleFlightCache:
    """Process-wide result cache with single-flight semantics."""

    def __init__(self) -> None:
        self._entries: Dict[Hashable, 'asyncio.Task[Any]'] = {}
        self._waiters: Dict['asyncio.Task[Any]', int] = {}
        self._generation: int = 0
        self.hits: int = 0
        self.misses: int = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    @property
    def generation(self) -> int:
        return self._generation

    async def run(self, key: Hashable, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Return the result for `key`, starting `factory()` only on a miss.

        Args:
            key: Hashable cache key. Value-equal keys share a slot.
            factory: Zero-argument callable returning an awaitable that computes
                the slot value. Called at most once per live slot.

        Cancelling the last waiter of an unfinished computation cancels it.

        Returns:
            The (shared) computed value.

        Raises:
            asyncio.CancelledError: If the slot was invalidated while in flight.
            Exception: Whatever the computation raised; the slot is evicted.
        """
        task = self._entries.get(key)

        if task is None:
            self.misses += 1
            logger.debug(f"Cache miss for {key!r}, starting computation")
            task = asyncio.ensure_future(factory())
            self._entries[key] = task
            generation = self._generation
            task.add_done_callback(
                lambda done: self._on_done(key, done, generation)
            )
        else:
            self.hits += 1

        self._waiters[task] = self._waiters.get(task, 0) + 1
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.done() and self._waiters[task] == 1:
                logger.debug(f"Last waiter for {key!r} cancelled, cancelling computation")
                task.cancel()
            raise
        finally:
            remaining = self._waiters[task] - 1
            if remaining:
                self._waiters[task] = remaining
            else:
                del self._waiters[task]

    def _on_done(self, key: Hashable, task: 'asyncio.Task[Any]', generation: int) -> None:
        if generation != self._generation or self._entries.get(key) is not task:
            return

        if task.cancelled() or task.exception() is not None:
            # Only successful results are kept
            del self._entries[key]

    def invalidate(self) -> int:
        """
        Cancel every in-flight computation and drop all cached slots.

        Returns:
            Number of in-flight computations that were cancelled.
        """
        self._generation += 1

        pending = [task for task in self._entries.values() if not task.done()]
        for task in pending:
            task.cancel()

        self._entries.clear()
        logger.info(
            f"Summarization cache invalidated (generation {self._generation}, "
            f"{len(pending)} in-flight computations cancelled)"
        )
        return len(pending)
