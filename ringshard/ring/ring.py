"""
Consistent Hash Ring with bounded-load lookups.

Keys and hosts are hashed onto a shared 64-bit circular space. Each host
places ``replication_factor`` virtual nodes on the ring, and a key belongs
to the host owning the first position at or after the key's hash.

Key properties:
- Consistent: same key always maps to the same host (given same members)
- Minimal disruption: adding/removing a host only remaps keys whose
  successor position belonged to that host
- Bounded load: get_least() skips hosts already at the per-host cap and
  overflows to the next ring successor

The ring is thread-confined. Use LockedRing or AsyncLockedRing when it is
shared across threads or tasks.

Example usage:
    ring = Ring(RingConfig(replication_factor=10))

    ring.add("1.1.1.1")
    ring.add("2.2.2.2")
    ring.add("3.3.3.3")

    owner = ring.get("/foo")

    host = ring.get_least("/bar")
    if host is not None:
        ring.inc_load(host)
        ...
        ring.decr_load(host)
"""

from __future__ import annotations

import math
from typing import Any

from ringshard.env import Env
from ringshard.errors import EmptyRingError, UnknownHostError
from ringshard.hashing import UINT64_MASK, Blake2bHasher, Hasher, get_hasher
from ringshard.logging import LoadCapExhausted, LoggerStream, RingCleared

from .config import RingConfig
from .hash_index import HashIndex
from .membership import MembershipTable


class Ring:
    __slots__ = (
        "_config",
        "_hasher",
        "_index",
        "_members",
        "_load",
        "_logger",
    )

    def __init__(
        self,
        config: RingConfig | None = None,
        hasher: Hasher | None = None,
        logger: LoggerStream | None = None,
    ) -> None:
        self._config = config or RingConfig()
        self._hasher = hasher or Blake2bHasher()
        self._logger = logger or LoggerStream(name="ringshard.ring")

        self._index = HashIndex()
        self._members = MembershipTable(
            self._index,
            self._hasher,
            self._config.replication_factor,
            self._logger,
        )

        # Sum of every host's load
        self._load = 0

    @classmethod
    def from_env(
        cls,
        env: Env,
        logger: LoggerStream | None = None,
    ) -> Ring:
        if logger is None:
            logger = LoggerStream(name="ringshard.ring")
            logger.config.update(
                log_level=env.RING_LOG_LEVEL,
                log_output=env.RING_LOG_OUTPUT,
            )

        return cls(
            config=RingConfig.from_env(env),
            hasher=get_hasher(env.RING_HASHER),
            logger=logger,
        )

    @property
    def config(self) -> RingConfig:
        return self._config

    @property
    def replication_factor(self) -> int:
        return self._config.replication_factor

    @property
    def missing_positions(self) -> int:
        """Count of positions found absent while removing hosts."""
        return self._members.missing_positions

    # =========================================================================
    # Membership
    # =========================================================================

    def add(self, hostname: str) -> bool:
        """
        Add a host to the ring. Adding a registered host is a no-op.

        Returns:
            True if the host was added, False if it was already present.
        """
        return self._members.add(hostname)

    def remove(self, hostname: str) -> bool:
        """
        Remove a host and all of its virtual nodes from the ring.

        Returns:
            True if the host was removed, False if it was not registered.
        """
        host = self._members.remove(hostname)
        if host is None:
            return False

        self._load -= host.load
        return True

    def hosts(self) -> set[str]:
        return self._members.hosts()

    def has_host(self, hostname: str) -> bool:
        return hostname in self._members

    def host_count(self) -> int:
        return len(self._members)

    def positions(self, hostname: str) -> list[int] | None:
        host = self._members.get(hostname)
        if host is None:
            return None

        return list(host.positions)

    def clear(self) -> None:
        """Remove every host from the ring."""
        hosts_removed = len(self._members)
        self._members.clear()
        self._load = 0

        self._logger.log(
            RingCleared(
                message=f"Cleared {hosts_removed} hosts from ring",
                hosts_removed=hosts_removed,
            )
        )

    # =========================================================================
    # Lookup Operations
    # =========================================================================

    def get(self, key: str) -> str | None:
        """
        Get the host responsible for a key.

        Returns:
            The owning host name, or None if the ring is empty.
        """
        try:
            index = self._index.search(self._hash(key))

        except EmptyRingError:
            return None

        return self._members.host_at(self._index.owner_at(index)).name

    def get_least(self, key: str) -> str | None:
        """
        Get the host for a key under bounded load.

        Starts at the host get() would choose and walks clockwise until it
        finds a host whose load + 1 stays within avg_load(). Each distinct
        host is checked once; if all are at the cap the host get() would
        choose is returned.

        Returns:
            The selected host name, or None if the ring is empty.
        """
        try:
            index = self._index.search(self._hash(key))

        except EmptyRingError:
            return None

        cap = self.avg_load()
        host_count = len(self._members)
        first_slot = self._index.owner_at(index)
        checked: set[int] = set()

        for _, slot in self._index.successors(index):
            if slot in checked:
                continue

            host = self._members.host_at(slot)
            if host.load + 1 <= cap:
                return host.name

            checked.add(slot)
            if len(checked) >= host_count:
                break

        fallback = self._members.host_at(first_slot)
        self._logger.log(
            LoadCapExhausted(
                message=f"Every host is at the load cap for key {key}, falling back to {fallback.name}",
                key=key,
                host=fallback.name,
                cap=cap,
                hosts_checked=len(checked),
            )
        )

        return fallback.name

    def get_n(self, key: str, count: int) -> list[str]:
        """
        Get up to count distinct hosts for a key, walking clockwise from
        the key's owner. Useful for replication and failover.
        """
        if count < 1:
            return []

        try:
            index = self._index.search(self._hash(key))

        except EmptyRingError:
            return []

        count = min(count, len(self._members))
        result: list[str] = []
        seen_slots: set[int] = set()

        for _, slot in self._index.successors(index):
            if slot in seen_slots:
                continue

            seen_slots.add(slot)
            result.append(self._members.host_at(slot).name)

            if len(result) >= count:
                break

        return result

    # =========================================================================
    # Load Accounting
    # =========================================================================

    def set_load(self, hostname: str, load: int) -> bool:
        """
        Set the load of a host.

        Returns:
            True if the load was set, False if the host is unknown.
        """
        if load < 0:
            raise ValueError(f"Load must be non-negative, got {load}")

        try:
            host = self._members.require(hostname)

        except UnknownHostError:
            return False

        self._load += load - host.load
        host.load = load
        return True

    def inc_load(self, hostname: str) -> bool:
        try:
            host = self._members.require(hostname)

        except UnknownHostError:
            return False

        host.load += 1
        self._load += 1
        return True

    def decr_load(self, hostname: str) -> bool:
        """
        Decrement the load of a host by one, saturating at zero.

        Returns:
            True if the load was decremented, False if the host is unknown
            or its load is already zero.
        """
        try:
            host = self._members.require(hostname)

        except UnknownHostError:
            return False

        if host.load == 0:
            return False

        host.load -= 1
        self._load -= 1
        return True

    def get_load(self, hostname: str) -> int | None:
        host = self._members.get(hostname)
        if host is None:
            return None

        return host.load

    def total_load(self) -> int:
        return self._load

    def avg_load(self) -> float:
        """
        Per-host load cap used by get_least().

        Counts one extra unit for the key about to be placed, scales the
        mean by the configured load factor and never drops below 1.0.
        """
        host_count = max(len(self._members), 1)
        mean_load = (self._load + 1) / host_count
        return max(float(math.ceil(mean_load * self._config.load)), 1.0)

    # =========================================================================
    # Statistics
    # =========================================================================

    def get_distribution(self, sample_keys: list[str]) -> dict[str, int]:
        """Count how many of the sample keys each host owns."""
        distribution: dict[str, int] = {host.name: 0 for host in self._members}

        for key in sample_keys:
            owner = self.get(key)
            if owner is not None:
                distribution[owner] += 1

        return distribution

    def get_ring_info(self) -> dict[str, Any]:
        return {
            "host_count": len(self._members),
            "virtual_node_count": len(self._index),
            "replication_factor": self._config.replication_factor,
            "load_factor": self._config.load,
            "total_load": self._load,
            "avg_load": self.avg_load(),
            "hosts": {
                host.name: {
                    "load": host.load,
                    "positions": len(host.positions),
                }
                for host in self._members
            },
        }

    def _hash(self, key: str) -> int:
        return self._hasher.hash(key) & UINT64_MASK
