from src.gnews_proxy.tools.cache import DEFAULT_TTL_SECONDS, TTLCache


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_returns_stored_value_until_expiry() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)

    cache.put("key", {"articles": []}, ttl_seconds=10)
    assert cache.get("key") == {"articles": []}

    clock.advance(9.9)
    assert cache.get("key") == {"articles": []}

    clock.advance(0.1)
    assert cache.get("key") is None
    assert len(cache) == 0


def test_default_ttl_is_ten_minutes() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)

    cache.put("key", "value")
    clock.advance(DEFAULT_TTL_SECONDS - 1)
    assert cache.get("key") == "value"
    clock.advance(1)
    assert cache.get("key") is None
    assert DEFAULT_TTL_SECONDS == 600


def test_missing_key_is_absent_not_an_error() -> None:
    cache = TTLCache()
    assert cache.get("nope") is None


def test_put_overwrites_value_and_expiry() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)

    cache.put("key", "old", ttl_seconds=5)
    clock.advance(4)
    cache.put("key", "new", ttl_seconds=5)
    clock.advance(4)

    assert cache.get("key") == "new"


def test_delete_and_clear() -> None:
    cache = TTLCache()
    cache.put("a", 1)
    cache.put("b", 2)

    cache.delete("a")
    cache.delete("does-not-exist")
    assert cache.get("a") is None
    assert cache.get("b") == 2

    cache.clear()
    assert cache.get("b") is None
    assert len(cache) == 0


def test_purge_expired_removes_only_stale_entries() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.put("short", 1, ttl_seconds=1)
    cache.put("long", 2, ttl_seconds=100)

    clock.advance(5)

    assert cache.purge_expired() == 1
    assert len(cache) == 1
    assert cache.get("long") == 2


def test_put_sweeps_expired_keys_that_are_never_read() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock, sweep_every=5)

    for i in range(4):
        cache.put(f"stale-{i}", i, ttl_seconds=10)
    clock.advance(60)
    cache.put("fresh", "value", ttl_seconds=10)

    assert len(cache) == 1
    assert cache.get("fresh") == "value"


def test_sweep_waits_for_interval() -> None:
    clock = FakeClock()
    cache = TTLCache(clock=clock, sweep_every=3)

    cache.put("a", 1, ttl_seconds=1)
    clock.advance(5)
    cache.put("b", 2, ttl_seconds=1)

    assert len(cache) == 2

    cache.put("c", 3, ttl_seconds=100)

    assert len(cache) == 2
    assert cache.get("c") == 3
