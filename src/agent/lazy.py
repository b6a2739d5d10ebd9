"""
agent.lazy - Memoized, single-flight async factory.

LazyResource builds an expensive object (here: the LLM + wallet agent) at
most once per holder, no matter how many coroutines ask for it while the
build is still running.

    Uninitialized --acquire()--> Initializing --ok--> Ready
                                      |
                                      +--error--> Uninitialized (retryable)

Every caller waiting on an attempt gets that attempt's result or error.
Failures are never cached: the next acquire() starts a fresh attempt.
The holder is owned by the composition root (factory.ServiceFactory);
there is no module-level instance.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LazyResource(Generic[T]):
    """Single-flight lazy initializer with acquire/reset."""

    def __init__(self, factory: Callable[[], Awaitable[T]], name: str = "resource"):
        self._factory = factory
        self._name = name
        self._instance: Optional[T] = None
        self._ready = False
        self._pending: Optional[asyncio.Task[T]] = None

    @property
    def ready(self) -> bool:
        """True once an instance has been built and cached."""
        return self._ready

    @property
    def initializing(self) -> bool:
        return self._pending is not None

    async def acquire(self) -> T:
        """Return the cached instance, joining or starting a build if needed."""
        if self._ready:
            return self._instance  # type: ignore[return-value]

        if self._pending is None:
            logger.info("Initializing %s...", self._name)
            self._pending = asyncio.ensure_future(self._initialize())

        # shield: a cancelled waiter must not cancel the shared attempt
        return await asyncio.shield(self._pending)

    def reset(self) -> None:
        """Drop the cached instance so the next acquire() rebuilds it.

        An attempt already in flight is not interrupted; its waiters still
        receive its result.
        """
        self._instance = None
        self._ready = False
        logger.info("%s reset", self._name)

    async def _initialize(self) -> T:
        task = asyncio.current_task()
        try:
            instance = await self._factory()
        except BaseException as e:
            if isinstance(e, Exception):
                logger.exception("Failed to initialize %s", self._name)
            if self._pending is task:
                self._pending = None
            raise

        if self._pending is task:
            self._instance = instance
            self._ready = True
            self._pending = None
            logger.info("%s ready", self._name)
        return instance
