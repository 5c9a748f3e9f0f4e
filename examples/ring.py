from ringshard import Ring, RingConfig


def run():
    ring = Ring(RingConfig())

    ring.add("1.1.1.1")
    ring.add("2.2.2.2")
    ring.add("3.3.3.3")

    for key in ["1.1.1.1", "8.8.8.8", "/foo", "/bar"]:
        print(f"{key} -> {ring.get(key)}")

    for key in ["/foo", "/bar", "/baz", "/qux"]:
        host = ring.get_least(key)
        if host is not None:
            ring.inc_load(host)
            print(f"{key} -> {host} (load cap {ring.avg_load()})")

    ring.remove("2.2.2.2")
    print(ring.get_ring_info())


run()
