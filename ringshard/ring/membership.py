"""
Membership table - host registration and virtual node placement.

Hosts live in an arena of slots owned by the table. The hash index and
every other component refer to a host by its integer slot, never by a
shared reference, so a whole ring can be guarded by a single lock.
"""

from typing import Iterator

from ringshard.errors import RingPositionMissingError, UnknownHostError
from ringshard.hashing import UINT64_MASK, Hasher
from ringshard.logging import HostAdded, HostRemoved, LoggerStream, RingPositionMissing

from .hash_index import HashIndex
from .host import Host


class MembershipTable:
    __slots__ = (
        "_index",
        "_hasher",
        "_replicas",
        "_logger",
        "_arena",
        "_free_slots",
        "_slots",
        "missing_positions",
    )

    def __init__(
        self,
        index: HashIndex,
        hasher: Hasher,
        replicas: int,
        logger: LoggerStream,
    ) -> None:
        self._index = index
        self._hasher = hasher
        self._replicas = replicas
        self._logger = logger

        self._arena: list[Host | None] = []
        self._free_slots: list[int] = []
        self._slots: dict[str, int] = {}

        # Positions found absent or re-owned during removal
        self.missing_positions = 0

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, name: str) -> bool:
        return name in self._slots

    def __iter__(self) -> Iterator[Host]:
        for slot in self._slots.values():
            yield self._arena[slot]

    def replica_positions(self, name: str) -> list[int]:
        """Derive the ring position of every virtual node for a host name."""
        return [
            self._hasher.hash(f"{name}{replica}") & UINT64_MASK
            for replica in range(self._replicas)
        ]

    def add(self, name: str) -> bool:
        if name in self._slots:
            return False

        slot = self._allocate_slot()
        host = Host(name=name, slot=slot)
        self._arena[slot] = host
        self._slots[name] = slot

        for position in self.replica_positions(name):
            owner = self._index.owner_of(position)
            if owner == slot:
                continue

            if owner is not None:
                # The position moves to this host, so the previous owner loses it
                self._arena[owner].positions.remove(position)

            self._index.insert(position, slot)
            host.positions.append(position)

        self._logger.log(
            HostAdded(
                message=f"Added host {name} with {self._replicas} virtual nodes",
                host=name,
                replicas=self._replicas,
                host_count=len(self._slots),
            )
        )

        return True

    def remove(self, name: str) -> Host | None:
        slot = self._slots.get(name)
        if slot is None:
            return None

        for replica, position in enumerate(self.replica_positions(name)):
            try:
                self._index.remove(position, slot)

            except RingPositionMissingError:
                self.missing_positions += 1
                self._logger.log(
                    RingPositionMissing(
                        message=f"Position {position} for host {name} was already absent from the ring",
                        host=name,
                        position=position,
                        replica=replica,
                    )
                )

        del self._slots[name]
        host = self._arena[slot]
        self._arena[slot] = None
        self._free_slots.append(slot)

        self._logger.log(
            HostRemoved(
                message=f"Removed host {name}",
                host=name,
                load=host.load,
                host_count=len(self._slots),
            )
        )

        return host

    def get(self, name: str) -> Host | None:
        slot = self._slots.get(name)
        if slot is None:
            return None

        return self._arena[slot]

    def require(self, name: str) -> Host:
        host = self.get(name)
        if host is None:
            raise UnknownHostError(name)

        return host

    def host_at(self, slot: int) -> Host:
        return self._arena[slot]

    def hosts(self) -> set[str]:
        return set(self._slots)

    def clear(self) -> None:
        self._index.clear()
        self._arena.clear()
        self._free_slots.clear()
        self._slots.clear()

    def _allocate_slot(self) -> int:
        if self._free_slots:
            return self._free_slots.pop()

        self._arena.append(None)
        return len(self._arena) - 1
