"""
Single-flight lazy initialization cell.

Holds a value built by an async factory on first use. Concurrent first
callers await one shared task; a failed build is raised to every waiter
and leaves the cell empty so the next call starts over.

Dependencies: asyncio
System role: Guarded lazy-init for process-wide resources
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleFlightCell(Generic[T]):
    """Lazily built value shared by all callers of ``get()``."""

    def __init__(self, factory: Callable[[], Awaitable[T]]) -> None:
        """
        Args:
            factory: Coroutine function producing the value
        """
        self._factory = factory
        self._value: T | None = None
        self._ready = False
        self._inflight: asyncio.Task[T] | None = None

    @property
    def ready(self) -> bool:
        """Whether the value has been built."""
        return self._ready

    async def get(self) -> T:
        """
        Return the value, building it on first use.

        Raises:
            Exception: Whatever the factory raised, delivered to all waiters
        """
        if self._ready:
            return self._value  # type: ignore[return-value]

        if self._inflight is None:
            self._inflight = asyncio.ensure_future(self._build())

        # shield: one waiter being cancelled must not cancel the shared build
        return await asyncio.shield(self._inflight)

    async def _build(self) -> T:
        try:
            value = await self._factory()
        except BaseException:
            self._inflight = None
            raise
        self._value = value
        self._ready = True
        self._inflight = None
        return value

    def reset(self) -> None:
        """Drop the cached value; the next ``get()`` rebuilds it."""
        self._value = None
        self._ready = False
        self._inflight = None
