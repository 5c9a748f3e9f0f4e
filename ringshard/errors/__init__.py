from .ring import (
    EmptyRingError,
    RingError,
    RingPositionMissingError,
    UnknownHasherError,
    UnknownHostError,
)

__all__ = [
    "RingError",
    "EmptyRingError",
    "UnknownHostError",
    "RingPositionMissingError",
    "UnknownHasherError",
]
