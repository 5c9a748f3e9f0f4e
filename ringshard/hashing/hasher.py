from typing import Protocol, runtime_checkable


UINT64_MASK = 0xFFFFFFFFFFFFFFFF


@runtime_checkable
class Hasher(Protocol):
    """
    Maps an arbitrary string to an unsigned 64-bit ring position.

    Implementations must be deterministic across processes; Python's builtin
    ``hash`` is salted per interpreter and is not a valid hasher.
    """

    def hash(self, key: str) -> int: ...
