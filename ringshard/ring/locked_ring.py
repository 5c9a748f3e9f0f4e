"""
Lock wrappers for sharing one Ring across threads or asyncio tasks.

Every operation, lookups included, runs under a single exclusive lock
around the whole ring. There is no per-host locking since add and remove
mutate the shared sorted index.
"""

import asyncio
import threading
from typing import Any

from .ring import Ring


class LockedRing:
    __slots__ = (
        "_ring",
        "_lock",
    )

    def __init__(self, ring: Ring | None = None) -> None:
        self._ring = ring or Ring()
        self._lock = threading.Lock()

    @property
    def replication_factor(self) -> int:
        return self._ring.replication_factor

    def add(self, hostname: str) -> bool:
        with self._lock:
            return self._ring.add(hostname)

    def remove(self, hostname: str) -> bool:
        with self._lock:
            return self._ring.remove(hostname)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._ring.get(key)

    def get_least(self, key: str) -> str | None:
        with self._lock:
            return self._ring.get_least(key)

    def acquire_least(self, key: str) -> str | None:
        """Select a host under bounded load and charge it one unit of load."""
        with self._lock:
            host = self._ring.get_least(key)
            if host is not None:
                self._ring.inc_load(host)

            return host

    def get_n(self, key: str, count: int) -> list[str]:
        with self._lock:
            return self._ring.get_n(key, count)

    def hosts(self) -> set[str]:
        with self._lock:
            return self._ring.hosts()

    def set_load(self, hostname: str, load: int) -> bool:
        with self._lock:
            return self._ring.set_load(hostname, load)

    def inc_load(self, hostname: str) -> bool:
        with self._lock:
            return self._ring.inc_load(hostname)

    def decr_load(self, hostname: str) -> bool:
        with self._lock:
            return self._ring.decr_load(hostname)

    def get_load(self, hostname: str) -> int | None:
        with self._lock:
            return self._ring.get_load(hostname)

    def total_load(self) -> int:
        with self._lock:
            return self._ring.total_load()

    def avg_load(self) -> float:
        with self._lock:
            return self._ring.avg_load()

    def get_ring_info(self) -> dict[str, Any]:
        with self._lock:
            return self._ring.get_ring_info()


class AsyncLockedRing:
    __slots__ = (
        "_ring",
        "_lock",
    )

    def __init__(self, ring: Ring | None = None) -> None:
        self._ring = ring or Ring()
        self._lock = asyncio.Lock()

    @property
    def replication_factor(self) -> int:
        return self._ring.replication_factor

    async def add(self, hostname: str) -> bool:
        async with self._lock:
            return self._ring.add(hostname)

    async def remove(self, hostname: str) -> bool:
        async with self._lock:
            return self._ring.remove(hostname)

    async def get(self, key: str) -> str | None:
        async with self._lock:
            return self._ring.get(key)

    async def get_least(self, key: str) -> str | None:
        async with self._lock:
            return self._ring.get_least(key)

    async def acquire_least(self, key: str) -> str | None:
        async with self._lock:
            host = self._ring.get_least(key)
            if host is not None:
                self._ring.inc_load(host)

            return host

    async def get_n(self, key: str, count: int) -> list[str]:
        async with self._lock:
            return self._ring.get_n(key, count)

    async def hosts(self) -> set[str]:
        async with self._lock:
            return self._ring.hosts()

    async def set_load(self, hostname: str, load: int) -> bool:
        async with self._lock:
            return self._ring.set_load(hostname, load)

    async def inc_load(self, hostname: str) -> bool:
        async with self._lock:
            return self._ring.inc_load(hostname)

    async def decr_load(self, hostname: str) -> bool:
        async with self._lock:
            return self._ring.decr_load(hostname)

    async def get_load(self, hostname: str) -> int | None:
        async with self._lock:
            return self._ring.get_load(hostname)

    async def total_load(self) -> int:
        async with self._lock:
            return self._ring.total_load()

    async def avg_load(self) -> float:
        async with self._lock:
            return self._ring.avg_load()

    async def get_ring_info(self) -> dict[str, Any]:
        async with self._lock:
            return self._ring.get_ring_info()
