"""
Per-car serialization of selection changes within one process.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict

class CarLockRegistry:
    """
    Hands out one asyncio.Lock per car id.

    A lock is dropped once no task holds or waits on it, so the registry
    only grows with the number of cars under contention.
    """
    
    def __init__(self) -> None:
        self._locks: Dict[int, asyncio.Lock] = {}
        self._users: Dict[int, int] = {}
    
    @asynccontextmanager
    async def hold(self, car_id: int) -> AsyncIterator[None]:
        lock = self._locks.get(car_id)
        if lock is None:
            lock = self._locks[car_id] = asyncio.Lock()
        self._users[car_id] = self._users.get(car_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._users[car_id] -= 1
            if self._users[car_id] == 0:
                del self._users[car_id]
                del self._locks[car_id]
    
    def is_locked(self, car_id: int) -> bool:
        lock = self._locks.get(car_id)
        return lock is not None and lock.locked()
    
    def __len__(self) -> int:
        return len(self._locks)

# Shared by every request handled in this process
car_locks = CarLockRegistry()
