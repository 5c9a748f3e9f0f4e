import hashlib

from ringshard.errors import UnknownHasherError

from .hasher import Hasher


class Blake2bHasher:
    """
    BLAKE2b-512 digest of the UTF-8 key, first 8 bytes read little-endian.
    """

    __slots__ = ()

    name = "blake2b"

    def hash(self, key: str) -> int:
        digest = hashlib.blake2b(key.encode("utf-8")).digest()
        return int.from_bytes(digest[:8], byteorder="little")


class MD5Hasher:
    """MD5 digest of the UTF-8 key, first 8 bytes read big-endian."""

    __slots__ = ()

    name = "md5"

    def hash(self, key: str) -> int:
        digest = hashlib.md5(key.encode("utf-8"), usedforsecurity=False).digest()
        return int.from_bytes(digest[:8], byteorder="big")


_HASHERS: dict[str, type[Hasher]] = {
    Blake2bHasher.name: Blake2bHasher,
    MD5Hasher.name: MD5Hasher,
}


def get_hasher(name: str) -> Hasher:
    hasher_type = _HASHERS.get(name.lower())
    if hasher_type is None:
        raise UnknownHasherError(name)

    return hasher_type()
