"""Per-key mutual exclusion for read-modify-write sequences.

Register (check-then-insert) and update-balance (read-then-save) on the
spreadsheet backend are not atomic at the store level. Holding the lock for
the username serializes them inside this process.

Usage:
    async with username_locks.hold(username):
        ...
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager


class KeyedLock:
    """A registry of asyncio.Lock objects, one per key, created on demand.

    Entries are dropped once no task holds or waits on them, so the registry
    does not grow with every username ever seen.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}
        self._waiters: dict[str, int] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._waiters[key] = self._waiters.get(key, 0) + 1
        try:
            async with lock:
                yield
        finally:
            self._waiters[key] -= 1
            if self._waiters[key] == 0:
                del self._waiters[key]
                del self._locks[key]

    def __len__(self) -> int:
        return len(self._locks)


# Shared by the user and account services
username_locks = KeyedLock()
