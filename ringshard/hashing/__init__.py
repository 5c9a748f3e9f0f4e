from .digest_hashers import Blake2bHasher, MD5Hasher, get_hasher
from .hasher import UINT64_MASK, Hasher

__all__ = [
    "Hasher",
    "Blake2bHasher",
    "MD5Hasher",
    "get_hasher",
    "UINT64_MASK",
]
