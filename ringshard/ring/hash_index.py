import bisect
from typing import Iterator

from ringshard.errors import EmptyRingError, RingPositionMissingError


class HashIndex:
    """
    Sorted ring positions, each bound to the arena slot of one host.

    The sorted list and the position -> slot map always hold exactly the
    same set of positions.
    """

    __slots__ = (
        "_sorted_positions",
        "_owners",
    )

    def __init__(self) -> None:
        self._sorted_positions: list[int] = []
        self._owners: dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._sorted_positions)

    def __contains__(self, position: int) -> bool:
        return position in self._owners

    def __iter__(self) -> Iterator[tuple[int, int]]:
        for position in self._sorted_positions:
            yield position, self._owners[position]

    def insert(self, position: int, slot: int) -> None:
        # Colliding positions are rebound to the last writer
        if position not in self._owners:
            bisect.insort(self._sorted_positions, position)

        self._owners[position] = slot

    def remove(self, position: int, slot: int | None = None) -> None:
        owner = self._owners.get(position)
        if owner is None or (slot is not None and owner != slot):
            raise RingPositionMissingError(position, slot)

        del self._owners[position]

        index = bisect.bisect_left(self._sorted_positions, position)
        del self._sorted_positions[index]

    def search(self, hash_value: int) -> int:
        """
        Return the index of the first position >= hash_value, wrapping
        around to index 0 when hash_value is past the last position.
        """
        if not self._sorted_positions:
            raise EmptyRingError()

        index = bisect.bisect_left(self._sorted_positions, hash_value)
        if index >= len(self._sorted_positions):
            index = 0

        return index

    def position_at(self, index: int) -> int:
        return self._sorted_positions[index]

    def owner_at(self, index: int) -> int:
        return self._owners[self._sorted_positions[index]]

    def owner_of(self, position: int) -> int | None:
        return self._owners.get(position)

    def successors(self, index: int) -> Iterator[tuple[int, int]]:
        """Walk the ring clockwise once, starting at index."""
        ring_size = len(self._sorted_positions)
        for offset in range(ring_size):
            position = self._sorted_positions[(index + offset) % ring_size]
            yield position, self._owners[position]

    def clear(self) -> None:
        self._sorted_positions.clear()
        self._owners.clear()
