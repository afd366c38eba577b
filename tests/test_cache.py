import time

import pytest

from conftest import FakeClock
from uptime_gateway.cache.ttl_cache import TTLCache


def test_cache_round_trip():
    cache = TTLCache()
    cache.set("k", {"v": 1}, ttl_ms=60_000)
    assert cache.get("k") == {"v": 1}


def test_cache_expiry():
    cache = TTLCache()
    cache.set("k", {"v": 1}, ttl_ms=10)
    time.sleep(0.02)
    assert cache.get("k") is None


def test_cache_expires_exactly_at_deadline():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("site-data-v3", "payload", ttl_ms=60_000)

    clock.now += 59
    assert cache.get("site-data-v3") == "payload"
    clock.now += 1
    assert cache.get("site-data-v3") is None
    assert cache.metrics()["size"] == 0


def test_cache_overwrites_and_keeps_keys_apart():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("a", 1, ttl_ms=1000)
    cache.set("b", 2, ttl_ms=5000)
    cache.set("a", 3, ttl_ms=5000)

    clock.now += 2
    assert cache.get("a") == 3
    assert cache.get("b") == 2
    assert cache.get("missing") is None


def test_purge_expired_and_metrics():
    clock = FakeClock()
    cache = TTLCache(clock=clock)
    cache.set("short", 1, ttl_ms=100)
    cache.set("long", 2, ttl_ms=10_000)

    clock.now += 1
    assert cache.purge_expired() == 1
    assert cache.get("long") == 2
    assert cache.get("short") is None
    assert cache.metrics() == {"hits": 1, "misses": 1, "size": 1}


def test_rejects_non_positive_ttl():
    cache = TTLCache()
    with pytest.raises(ValueError):
        cache.set("k", 1, ttl_ms=0)


def test_clear_drops_every_entry():
    cache = TTLCache()
    cache.set("a", 1, ttl_ms=60_000)
    cache.set("b", 2, ttl_ms=60_000)
    cache.clear()
    assert cache.get("a") is None
    assert cache.metrics()["size"] == 0
