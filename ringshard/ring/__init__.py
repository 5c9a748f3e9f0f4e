"""
Consistent hashing ring with bounded-load lookups.

Provides:
- Sorted hash index with successor search and wrap-around
- Membership table owning host state in an indexed arena
- Plain and bounded-load lookups with per-host load accounting
- Lock wrappers for sharing a ring across threads or asyncio tasks
"""

from .config import RingConfig
from .hash_index import HashIndex
from .host import Host
from .locked_ring import AsyncLockedRing, LockedRing
from .membership import MembershipTable
from .ring import Ring

__all__ = [
    "Ring",
    "RingConfig",
    "Host",
    "HashIndex",
    "MembershipTable",
    "LockedRing",
    "AsyncLockedRing",
]
