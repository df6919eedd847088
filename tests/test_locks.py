"""Tests for the per-car lock registry."""

import asyncio

import pytest

from fleet.services.locks import CarLockRegistry


class TestCarLockRegistry:
    @pytest.mark.asyncio
    async def test_lock_is_released_and_dropped(self) -> None:
        locks = CarLockRegistry()

        async with locks.hold(10):
            assert locks.is_locked(10)
            assert len(locks) == 1

        assert not locks.is_locked(10)
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_same_car_is_serialized(self) -> None:
        locks = CarLockRegistry()
        events = []

        async def worker(name: str) -> None:
            async with locks.hold(10):
                events.append(f"{name}:start")
                await asyncio.sleep(0.01)
                events.append(f"{name}:end")

        await asyncio.gather(worker("a"), worker("b"))

        assert events == ["a:start", "a:end", "b:start", "b:end"]
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_different_cars_run_concurrently(self) -> None:
        locks = CarLockRegistry()
        inside = asyncio.Event()

        async def holder() -> None:
            async with locks.hold(10):
                await inside.wait()

        task = asyncio.create_task(holder())
        await asyncio.sleep(0)

        async with locks.hold(11):
            assert locks.is_locked(10)
            inside.set()

        await task
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_lock_released_on_error(self) -> None:
        locks = CarLockRegistry()

        with pytest.raises(RuntimeError):
            async with locks.hold(10):
                raise RuntimeError("boom")

        assert not locks.is_locked(10)
        assert len(locks) == 0
