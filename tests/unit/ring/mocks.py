import random
import string


class TableHasher:
    """Hasher that looks positions up in a fixed table, for placing virtual nodes by hand."""

    def __init__(self, table: dict[str, int], default: int = 0) -> None:
        self._table = table
        self._default = default

    def hash(self, key: str) -> int:
        return self._table.get(key, self._default)


def generate_keys(count: int, prefix: str = "key") -> list[str]:
    """Generate random lookup keys for testing."""
    return [
        f"{prefix}-{''.join(random.choices(string.hexdigits.lower(), k=16))}"
        for _ in range(count)
    ]
