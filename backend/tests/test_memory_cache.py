"""
Tests for the in-memory TTL cache.
"""

from attackdash.services.cache import MemoryCache, get_memory_cache


def test_hit_returns_same_object(cache):
    value = {"price": 1}
    cache.set("quote:X", value, ttl=300)
    assert cache.get("quote:X") is value


def test_miss_returns_none(cache):
    assert cache.get("missing") is None


def test_entry_expires_at_ttl(cache, clock):
    cache.set("k", "v", ttl=300)
    clock.advance(299.9)
    assert cache.get("k") == "v"
    clock.advance(0.1)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_set_replaces_entry_and_expiry(cache, clock):
    cache.set("k", "old", ttl=10)
    clock.advance(5)
    cache.set("k", "new", ttl=10)
    clock.advance(8)
    assert cache.get("k") == "new"


def test_delete_and_clear(cache):
    cache.set("a", 1, ttl=10)
    cache.set("b", 2, ttl=10)
    cache.delete("a")
    cache.delete("never-set")
    assert cache.get("a") is None
    cache.clear()
    assert len(cache) == 0


def test_singleton():
    assert isinstance(get_memory_cache(), MemoryCache)
    assert get_memory_cache() is get_memory_cache()


def test_write_purges_expired_entries(cache, clock):
    cache.set("quote:A", 1, ttl=10)
    cache.set("quote:B", 2, ttl=100)
    clock.advance(10)
    cache.set("quote:C", 3, ttl=10)

    assert len(cache) == 2
    assert cache.get("quote:B") == 2
    assert cache.get("quote:C") == 3
