"""
Test: Consistent Hash Ring lookups

This test validates plain Ring.get() lookups:
1. Empty ring returns None
2. Deterministic assignment: same key always maps to same host
3. Minimal disruption: removing a host only remaps that host's keys
4. Even distribution across hosts
5. Preference lists of distinct hosts

Run with: pytest tests/unit/ring/test_ring_lookup.py
"""

import statistics

from ringshard.logging import LoggerStream
from ringshard.ring import Ring, RingConfig

from tests.unit.ring.mocks import TableHasher, generate_keys


def test_empty_ring(ring: Ring) -> None:
    """Both lookups report an empty ring as None."""
    assert ring.get("anything") is None
    assert ring.get_least("anything") is None
    assert ring.get_n("anything", 2) == []
    assert ring.hosts() == set()


def test_single_host_owns_every_key(ring: Ring) -> None:
    ring.add("1.1.1.1")

    assert ring.get("1.1.1.1") == "1.1.1.1"
    for key in generate_keys(50):
        assert ring.get(key) == "1.1.1.1"


def test_deterministic_assignment(three_host_ring: Ring) -> None:
    """Test that the same key always maps to the same host."""
    keys = generate_keys(100)

    first_assignments = {key: three_host_ring.get(key) for key in keys}

    for _ in range(10):
        for key in keys:
            assert three_host_ring.get(key) == first_assignments[key]


def test_same_topology_in_separate_rings(quiet_logger: LoggerStream) -> None:
    """Two rings built from the same hosts agree on every key."""
    first = Ring(logger=quiet_logger)
    second = Ring(logger=quiet_logger)
    for host in ["1.1.1.1", "2.2.2.2", "3.3.3.3"]:
        first.add(host)

    for host in ["3.3.3.3", "1.1.1.1", "2.2.2.2"]:
        second.add(host)

    for key in generate_keys(200):
        assert first.get(key) == second.get(key)


def test_minimal_disruption_on_remove(three_host_ring: Ring) -> None:
    """Only keys owned by the removed host change owner."""
    keys = generate_keys(1000)
    initial_assignments = {key: three_host_ring.get(key) for key in keys}

    three_host_ring.remove("2.2.2.2")

    for key in keys:
        current = three_host_ring.get(key)
        assert current != "2.2.2.2"

        if initial_assignments[key] != "2.2.2.2":
            assert current == initial_assignments[key], (
                f"Key {key} moved from {initial_assignments[key]} to {current}"
            )

    three_host_ring.add("2.2.2.2")

    restored = sum(
        1 for key in keys if three_host_ring.get(key) == initial_assignments[key]
    )
    assert restored == len(keys), "Not all keys restored after host re-added"


def test_minimal_redistribution_on_add(quiet_logger: LoggerStream) -> None:
    """Adding a host only takes keys, it never moves keys between old hosts."""
    ring = Ring(RingConfig(replication_factor=150), logger=quiet_logger)
    for host in ["gate-1:9000", "gate-2:9000", "gate-3:9000"]:
        ring.add(host)

    keys = generate_keys(1000)
    initial_assignments = {key: ring.get(key) for key in keys}

    ring.add("gate-4:9000")

    redistributed = 0
    for key in keys:
        current = ring.get(key)
        if current != initial_assignments[key]:
            assert current == "gate-4:9000"
            redistributed += 1

    redistribution_pct = redistributed / len(keys) * 100
    assert 10 <= redistribution_pct <= 40, (
        f"Redistribution {redistribution_pct:.1f}% outside expected range (10-40%)"
    )


def test_even_distribution(quiet_logger: LoggerStream) -> None:
    """Test that keys are evenly distributed across hosts."""
    ring = Ring(RingConfig(replication_factor=150), logger=quiet_logger)
    hosts = ["gate-1:9000", "gate-2:9000", "gate-3:9000", "gate-4:9000"]
    for host in hosts:
        ring.add(host)

    distribution = ring.get_distribution(generate_keys(10000))

    assert set(distribution) == set(hosts)
    assert sum(distribution.values()) == 10000

    counts = list(distribution.values())
    cv = statistics.stdev(counts) / statistics.mean(counts) * 100
    assert cv < 15, f"Coefficient of variation {cv:.1f}% too high (expected < 15%)"


def test_lookup_wraps_past_last_position(quiet_logger: LoggerStream) -> None:
    hasher = TableHasher(
        {"a0": 100, "b0": 200, "low": 50, "mid": 150, "high": 250},
    )
    ring = Ring(RingConfig(replication_factor=1), hasher=hasher, logger=quiet_logger)
    ring.add("a")
    ring.add("b")

    assert ring.get("low") == "a"
    assert ring.get("mid") == "b"
    assert ring.get("high") == "a"


def test_exact_position_match_selects_owner(quiet_logger: LoggerStream) -> None:
    hasher = TableHasher({"a0": 100, "b0": 200, "on-b": 200})
    ring = Ring(RingConfig(replication_factor=1), hasher=hasher, logger=quiet_logger)
    ring.add("a")
    ring.add("b")

    assert ring.get("on-b") == "b"


def test_hasher_output_is_masked_to_64_bits(quiet_logger: LoggerStream) -> None:
    hasher = TableHasher({"a0": 10, "b0": 20, "wide": 2**64 + 15})
    ring = Ring(RingConfig(replication_factor=1), hasher=hasher, logger=quiet_logger)
    ring.add("a")
    ring.add("b")

    assert ring.get("wide") == "b"


def test_get_n_returns_distinct_hosts(three_host_ring: Ring) -> None:
    for key in generate_keys(100):
        preference_list = three_host_ring.get_n(key, 2)

        assert len(preference_list) == 2
        assert len(set(preference_list)) == 2
        assert preference_list[0] == three_host_ring.get(key)

    assert len(three_host_ring.get_n("/foo", 10)) == 3
    assert three_host_ring.get_n("/foo", 0) == []


def test_end_to_end_scenario(three_host_ring: Ring) -> None:
    """Three hosts, lookups before and after removing one of them."""
    registered = {"1.1.1.1", "2.2.2.2", "3.3.3.3"}
    keys = ["1.1.1.1", "8.8.8.8", "/foo", "/bar"]

    before = {key: three_host_ring.get(key) for key in keys}
    for key in keys:
        assert before[key] in registered
        assert three_host_ring.get(key) == before[key]

    three_host_ring.remove("2.2.2.2")

    for key in keys:
        after = three_host_ring.get(key)
        assert after in {"1.1.1.1", "3.3.3.3"}

        if before[key] != "2.2.2.2":
            assert after == before[key]


def test_clear_empties_ring(three_host_ring: Ring) -> None:
    three_host_ring.set_load("1.1.1.1", 4)

    three_host_ring.clear()

    assert three_host_ring.hosts() == set()
    assert three_host_ring.total_load() == 0
    assert three_host_ring.get("/foo") is None
    assert three_host_ring.get_ring_info()["virtual_node_count"] == 0


def test_ring_info(three_host_ring: Ring) -> None:
    three_host_ring.set_load("3.3.3.3", 2)

    info = three_host_ring.get_ring_info()

    assert info["host_count"] == 3
    assert info["virtual_node_count"] == 30
    assert info["replication_factor"] == 10
    assert info["load_factor"] == 1.25
    assert info["total_load"] == 2
    assert info["hosts"]["3.3.3.3"] == {"load": 2, "positions": 10}


def test_distribution_counts_empty_host_name(ring: Ring) -> None:
    ring.add("")

    assert ring.get_distribution(["x", "y", "z"]) == {"": 3}
