"""
Integration tests for the cache store over the in-memory backend.

Exercises the full read, recompute and write cycle of
stale-while-revalidate caching.
"""

import pytest

from fuzzycache.domain.cache.value_objects import ABSENT, CacheEntryState
from fuzzycache.services.cache.cache_store import CacheStore


@pytest.fixture
def prefixed_store(memory_backend, rng, clock):
    """Cache store with a key prefix."""
    return CacheStore(memory_backend, "mycache_", rng=rng, clock=clock)


class TestCacheStoreFlow:
    """Test end-to-end cache behaviour."""

    def test_save_then_get(self, cache_store):
        """Test a saved payload is read back with its envelope."""
        entry = cache_store.get("cacheKey")
        entry.set_payload({"name": "Test", "items": [1, 2]}).set_best_before_seconds(30)

        cache_store.save(entry)
        loaded = cache_store.get("cacheKey")

        assert loaded.get_payload() == {"name": "Test", "items": [1, 2]}
        assert loaded.get_envelope() == entry.get_envelope()

    def test_falsy_payload_round_trip(self, cache_store):
        """Test falsy payloads are cache hits."""
        cache_store.save(cache_store.get("empty").set_payload([]))

        loaded = cache_store.get("empty")

        assert loaded.is_valid() is True
        assert loaded.get_payload() == []

    def test_payload_mutation_does_not_leak(self, cache_store):
        """Test changing payloads after save or get leaves the cached value intact."""
        payload = [1]
        cache_store.save(cache_store.get("k").set_payload(payload))
        payload.append(2)

        cache_store.get("k").get_payload().append(3)

        assert cache_store.get("k").get_payload() == [1]

    def test_prefixed_keys(self, prefixed_store, memory_backend):
        """Test the backend sees prefixed keys while callers use plain ones."""
        prefixed_store.save(prefixed_store.get("cacheKey").set_payload("data"))

        assert memory_backend.contains("mycache_cacheKey") is True
        assert memory_backend.contains("cacheKey") is False
        assert prefixed_store.has_key("cacheKey") is True

        prefixed_store.delete("cacheKey")

        assert memory_backend.fetch("mycache_cacheKey") is ABSENT

    def test_delete(self, cache_store):
        """Test deleted keys are gone."""
        cache_store.save(cache_store.get("cacheKey").set_payload("data"))

        cache_store.delete("cacheKey")

        assert cache_store.has_key("cacheKey") is False
        assert cache_store.get("cacheKey").is_expired() is True

    def test_prefixes_isolate_namespaces(self, memory_backend, rng, clock):
        """Test stores with different prefixes do not see each other."""
        first = CacheStore(memory_backend, "a:", rng=rng, clock=clock)
        second = CacheStore(memory_backend, "b:", rng=rng, clock=clock)

        first.save(first.get("shared").set_payload("from a"))

        assert second.has_key("shared") is False
        assert first.get("shared").get_payload() == "from a"

    def test_stale_while_revalidate(self, cache_store, clock):
        """Test an entry moves FRESH, STALE then ABSENT as time passes."""
        entry = cache_store.get("report")
        assert entry.get_state() == CacheEntryState.ABSENT

        entry.set_payload("v1").set_lifetime_seconds(300).set_best_before_seconds(30)
        cache_store.save(entry)

        clock.advance(10)
        assert cache_store.get("report").get_state() == CacheEntryState.FRESH

        clock.advance(30)
        stale = cache_store.get("report")
        assert stale.get_state() == CacheEntryState.STALE
        assert stale.get_payload() == "v1"

        cache_store.save(stale.set_payload("v2"))
        refreshed = cache_store.get("report")
        assert refreshed.get_state() == CacheEntryState.FRESH
        assert refreshed.get_payload() == "v2"

        clock.advance(300)
        assert cache_store.get("report").get_state() == CacheEntryState.ABSENT

    def test_fuzzed_lifetimes_spread_expiry(self, cache_store, clock):
        """Test entries written together do not all expire together."""
        for index in range(50):
            entry = cache_store.get(f"key-{index}")
            cache_store.save(entry.set_payload(index).set_lifetime_seconds(100).set_fuzz_factor(0.2))

        clock.advance(100)
        alive = sum(cache_store.has_key(f"key-{index}") for index in range(50))

        assert 0 < alive < 50

        clock.advance(21)
        assert not any(cache_store.has_key(f"key-{index}") for index in range(50))

    def test_legacy_raw_value(self, cache_store, memory_backend):
        """Test values written without an envelope are served."""
        memory_backend.store("legacy", ["plain", "list"], 60)

        entry = cache_store.get("legacy")

        assert entry.get_payload() == ["plain", "list"]
        assert entry.is_stale() is False
