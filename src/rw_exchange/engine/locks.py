"""Per-entity exclusive locks.

One asyncio.Lock per item id and per member id. `hold()` acquires a set of
them in a fixed global order so two operations touching the same pair of
entities can never deadlock.
"""

import asyncio
from collections import defaultdict
from collections.abc import AsyncIterator
from contextlib import AsyncExitStack, asynccontextmanager


def item_key(item_id: str) -> str:
    return f"item:{item_id}"


def member_key(member_id: str) -> str:
    return f"member:{member_id}"


class EntityLockManager:
    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = defaultdict(asyncio.Lock)

    def lock_for(self, key: str) -> asyncio.Lock:
        return self._locks[key]

    def discard(self, key: str) -> None:
        """Forget the lock of a retired entity (ids are never reused). No-op while held."""
        lock = self._locks.get(key)
        if lock is not None and not lock.locked():
            del self._locks[key]

    def __contains__(self, key: object) -> bool:
        return key in self._locks

    @asynccontextmanager
    async def hold(self, *keys: str) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for key in sorted(set(keys)):
                await stack.enter_async_context(self._locks[key])
            yield
