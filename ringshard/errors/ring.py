"""
Ring-specific exceptions.

These are raised at the internal seams of the ring (hash index, membership
table, hasher lookup). The public Ring operations translate them into
``None`` / ``False`` results so that callers never have to catch them for
the expected conditions (empty ring, unknown host, collided positions).
"""


class RingError(Exception):
    """Base class for every ringshard error."""

    pass


class EmptyRingError(RingError):
    """
    Raised when a successor search runs against an index with no positions.

    Ring.get and Ring.get_least report this condition as ``None`` so callers
    can fall back to a default host or queue the request.
    """

    def __init__(self) -> None:
        super().__init__("No hosts registered in ring")


class UnknownHostError(RingError):
    """Raised when a host name is not registered in the membership table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Host {name!r} is not registered in ring")
        self.name = name


class RingPositionMissingError(RingError):
    """
    Raised when a ring position expected during removal is not owned by the
    host being removed.

    This happens when two hosts hash a virtual node onto the same position
    and the later host took ownership of the bucket.
    """

    def __init__(self, position: int, slot: int | None = None) -> None:
        super().__init__(f"Ring position {position} is not present for slot {slot}")
        self.position = position
        self.slot = slot


class UnknownHasherError(RingError):
    """Raised when a hasher name does not resolve to a known implementation."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown hasher {name!r}")
        self.name = name
