"""Keyed asyncio locks — one critical section per collection or record."""

import asyncio
from weakref import WeakValueDictionary


class LockRegistry:
    """Hands out one ``asyncio.Lock`` per key.

    Locks are held weakly: a key's lock lives while some coroutine holds
    or waits on it, so the registry does not grow with every record id.
    """

    def __init__(self) -> None:
        self._locks: WeakValueDictionary[str, asyncio.Lock] = WeakValueDictionary()

    def lock(self, *parts: object) -> asyncio.Lock:
        """Return the lock for the key built from ``parts`` (e.g. "complaints", 7)."""
        key = ":".join(str(p) for p in parts)
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock
