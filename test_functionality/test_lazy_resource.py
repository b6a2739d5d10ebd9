"""
Test the single-flight LazyResource used to build the agent.
"""
import asyncio

import pytest

from agent.lazy import LazyResource


class _Factory:
    def __init__(self, failures: int = 0):
        self.calls = 0
        self.failures = failures
        self.release = asyncio.Event()

    async def __call__(self):
        self.calls += 1
        await self.release.wait()
        if self.calls <= self.failures:
            raise RuntimeError(f"attempt {self.calls} failed")
        return {"instance": self.calls}


@pytest.mark.asyncio
async def test_concurrent_acquire_constructs_once():
    factory = _Factory()
    resource = LazyResource(factory, name="test")

    waiters = [asyncio.ensure_future(resource.acquire()) for _ in range(10)]
    await asyncio.sleep(0)
    assert resource.initializing
    assert not resource.ready

    factory.release.set()
    results = await asyncio.gather(*waiters)

    assert factory.calls == 1
    assert all(r is results[0] for r in results)
    assert resource.ready
    assert not resource.initializing


@pytest.mark.asyncio
async def test_ready_instance_is_returned_without_rebuilding():
    factory = _Factory()
    factory.release.set()
    resource = LazyResource(factory)

    first = await resource.acquire()
    second = await resource.acquire()

    assert first is second
    assert factory.calls == 1


@pytest.mark.asyncio
async def test_failure_reaches_every_waiter_then_retries():
    factory = _Factory(failures=1)
    resource = LazyResource(factory)

    waiters = [asyncio.ensure_future(resource.acquire()) for _ in range(3)]
    await asyncio.sleep(0)
    factory.release.set()
    results = await asyncio.gather(*waiters, return_exceptions=True)

    assert factory.calls == 1
    assert all(isinstance(r, RuntimeError) for r in results)
    assert all(str(r) == "attempt 1 failed" for r in results)
    assert not resource.ready
    assert not resource.initializing

    instance = await resource.acquire()
    assert instance == {"instance": 2}
    assert factory.calls == 2


@pytest.mark.asyncio
async def test_reset_forces_rebuild():
    factory = _Factory()
    factory.release.set()
    resource = LazyResource(factory)

    first = await resource.acquire()
    resource.reset()
    assert not resource.ready
    second = await resource.acquire()

    assert first != second
    assert factory.calls == 2


@pytest.mark.asyncio
async def test_cancelled_waiter_does_not_cancel_shared_attempt():
    factory = _Factory()
    resource = LazyResource(factory)

    cancelled = asyncio.ensure_future(resource.acquire())
    survivor = asyncio.ensure_future(resource.acquire())
    await asyncio.sleep(0)
    cancelled.cancel()
    await asyncio.sleep(0)

    factory.release.set()
    instance = await survivor

    assert cancelled.cancelled()
    assert instance == {"instance": 1}
    assert factory.calls == 1
    assert resource.ready
