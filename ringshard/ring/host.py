from dataclasses import dataclass, field


@dataclass(slots=True)
class Host:
    """A physical host registered in the ring."""

    name: str
    slot: int
    load: int = 0

    # Ring positions placed for this host, in replica order
    positions: list[int] = field(default_factory=list)
