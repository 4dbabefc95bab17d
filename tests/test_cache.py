"""Tests for CacheManager.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

import dataclasses
import logging
import threading

import pytest

from towerstats_core.cache.cache import CacheConfig, CacheManager
from towerstats_core.cache.entry import CacheEntry
from towerstats_core.cache.namespace import Namespace


class FakeClock:
    """Manually advanced clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_cache(clock=None, **overrides) -> CacheManager:
    """Cache whose sweeper never fires during a test."""
    overrides.setdefault("sweeper_interval", 3600)
    return CacheManager(clock=clock or FakeClock(), **overrides)


class TestCacheConfig:
    """Tests for CacheConfig."""

    def test_defaults(self):
        """Test default values."""
        config = CacheConfig()

        assert config.enabled is True
        assert config.sweeper_interval == 1.0
        assert config.lifespan == 180.0

    def test_frozen(self):
        """Test config is immutable."""
        config = CacheConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.lifespan = 5

    def test_invalid_interval(self):
        """Test non-positive sweeper interval."""
        with pytest.raises(ValueError):
            CacheConfig(sweeper_interval=0)

    def test_invalid_lifespan(self):
        """Test negative lifespan."""
        with pytest.raises(ValueError):
            CacheConfig(lifespan=-1)

    def test_from_dict_partial(self):
        """Test missing keys take defaults."""
        config = CacheConfig.from_dict({"lifespan": 30})

        assert config.lifespan == 30
        assert config.enabled is True
        assert config.sweeper_interval == 1.0

    def test_from_dict_unknown_keys(self, caplog):
        """Test unknown keys are ignored with a warning."""
        with caplog.at_level(logging.WARNING):
            config = CacheConfig.from_dict({"enabled": False, "max_size": 10})

        assert config.enabled is False
        assert "max_size" in caplog.text

    def test_to_dict(self):
        """Test dictionary conversion."""
        assert CacheConfig(lifespan=5).to_dict() == {
            "enabled": True,
            "sweeper_interval": 1.0,
            "lifespan": 5,
        }


class TestCacheEntry:
    """Tests for CacheEntry."""

    def test_age(self):
        """Test age calculation."""
        entry = CacheEntry("value", timestamp=100.0)
        assert entry.age(130.0) == 30.0

    def test_expiry_is_strict(self):
        """Test an entry exactly lifespan old is still live."""
        entry = CacheEntry("value", timestamp=100.0)

        assert not entry.is_expired(10, 110.0)
        assert entry.is_expired(10, 110.5)


class TestNamespace:
    """Tests for Namespace."""

    def test_put_and_remove(self):
        """Test basic storage."""
        ns = Namespace("badges")
        ns.put("42", CacheEntry("value", 0.0))

        assert "42" in ns
        assert len(ns) == 1
        assert ns.remove("42")
        assert not ns.remove("42")
        assert "42" not in ns

    def test_purge_expired(self):
        """Test only expired entries are purged."""
        ns = Namespace("badges")
        ns.put("old", CacheEntry("a", 0.0))
        ns.put("new", CacheEntry("b", 50.0))

        assert ns.purge_expired(lifespan=20, now=60.0) == 1
        assert ns.keys() == ["new"]


class TestCacheManager:
    """Tests for CacheManager operations."""

    def test_get_never_written(self):
        """Test unknown namespace and key miss."""
        cache = make_cache()

        assert cache.get("badges", "42") is None
        assert not cache.has("badges", "42")
        cache.close()

    def test_set_and_get(self):
        """Test a write is visible immediately."""
        cache = make_cache()

        cache.set("followers", "42", ["1", "2"])
        assert cache.get("followers", "42") == ["1", "2"]
        assert cache.has("followers", "42")
        cache.close()

    def test_value_not_copied(self):
        """Test the stored object itself is returned."""
        cache = make_cache()
        value = {"id": 42}

        cache.set("badges", "42", value)
        assert cache.get("badges", "42") is value
        cache.close()

    def test_lifespan_boundary(self):
        """Test expiry on both sides of the lifespan."""
        clock = FakeClock()
        cache = make_cache(clock, lifespan=10)

        cache.set("badges", "42", "value")

        clock.advance(9.9)
        assert cache.get("badges", "42") == "value"

        clock.advance(0.2)
        assert cache.get("badges", "42") is None
        cache.close()

    def test_expired_entry_removed_on_read(self):
        """Test eager expiration deletes the entry."""
        clock = FakeClock()
        cache = make_cache(clock, lifespan=10)

        cache.set("badges", "42", "value")
        clock.advance(11)

        assert cache.size() == 1
        assert cache.get("badges", "42") is None
        assert cache.size() == 0
        assert not cache.has("badges", "42")
        assert cache.get_stats().expirations == 1
        cache.close()

    def test_overwrite_resets_age(self):
        """Test rewriting a key restarts its lifespan."""
        clock = FakeClock()
        cache = make_cache(clock, lifespan=10)

        cache.set("badges", "42", "first")
        clock.advance(5)
        cache.set("badges", "42", "second")
        clock.advance(9.9)

        assert cache.get("badges", "42") == "second"
        cache.close()

    def test_has_ignores_age(self):
        """Test has reports stale entries while get does not."""
        clock = FakeClock()
        cache = make_cache(clock, lifespan=10)

        cache.set("badges", "42", "value")
        clock.advance(11)

        assert cache.has("badges", "42")
        assert not cache.has_fresh("badges", "42")
        assert cache.has("badges", "42")
        assert cache.get("badges", "42") is None
        cache.close()

    def test_has_fresh(self):
        """Test has_fresh on live and missing entries."""
        cache = make_cache()

        assert not cache.has_fresh("badges", "42")
        cache.set("badges", "42", "value")
        assert cache.has_fresh("badges", "42")
        cache.close()

    def test_namespace_isolation(self):
        """Test namespaces do not share keys."""
        cache = make_cache()

        cache.set("badges", "42", "badge data")

        assert cache.get("followers", "42") is None
        assert not cache.has("followers", "42")
        assert cache.get("badges", "42") == "badge data"
        cache.close()

    def test_keys_compared_exactly(self):
        """Test keys differing in case or whitespace are distinct."""
        cache = make_cache()

        cache.set("badges", "abc", 1)

        assert cache.get("badges", "ABC") is None
        assert cache.get("badges", "abc ") is None
        assert cache.get("Badges", "abc") is None
        cache.close()

    def test_namespaces_created_lazily(self):
        """Test any access creates the namespace."""
        cache = make_cache()

        cache.get("badges", "1")
        cache.has("following", "1")
        cache.set("followers", "1", [])

        assert sorted(cache.namespaces()) == ["badges", "followers", "following"]
        cache.close()

    def test_clear(self):
        """Test clearing one or all namespaces."""
        cache = make_cache()

        cache.set("badges", "1", "a")
        cache.set("badges", "2", "b")
        cache.set("followers", "1", "c")

        assert cache.clear("badges") == 2
        assert cache.clear("missing") == 0
        assert cache.get("followers", "1") == "c"
        assert cache.clear() == 1
        assert cache.size() == 0
        cache.close()

    def test_overrides_merge_over_config(self):
        """Test keyword overrides replace config fields."""
        cache = CacheManager(CacheConfig(lifespan=5), enabled=False)

        assert cache.config.lifespan == 5
        assert cache.config.enabled is False

    def test_context_manager(self):
        """Test context manager stops the sweeper."""
        with make_cache() as cache:
            cache.set("badges", "42", "value")
            assert cache.is_sweeper_running

        assert not cache.is_sweeper_running

    def test_thread_safety(self):
        """Test concurrent access."""
        cache = CacheManager(sweeper_interval=0.01, lifespan=0)
        errors = []

        def worker(n):
            try:
                for i in range(100):
                    key = str(i)
                    cache.set(f"ns-{n}", key, i)
                    cache.get(f"ns-{n}", key)
                    cache.has(f"ns-{n}", key)
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        cache.close()

        assert not errors


class TestDisabledCache:
    """Tests for a disabled cache."""

    def test_operations_are_inert(self):
        """Test set is dropped and reads miss."""
        clock = FakeClock()
        cache = CacheManager(enabled=False, clock=clock)

        cache.set("badges", "42", "value")

        assert cache.get("badges", "42") is None
        assert not cache.has("badges", "42")
        assert not cache.has_fresh("badges", "42")
        clock.advance(1000)
        assert cache.get("badges", "42") is None
        assert cache.size() == 0

    def test_no_sweeper(self):
        """Test no background work is started."""
        cache = CacheManager(enabled=False)

        assert not cache.is_sweeper_running
        cache.start_sweeper()
        assert not cache.is_sweeper_running
        cache.stop_sweeper()
        cache.close()


class TestCacheStats:
    """Tests for cache statistics."""

    def test_counters(self):
        """Test hit, miss and set counting."""
        cache = make_cache()

        cache.set("badges", "42", "value")
        cache.get("badges", "42")
        cache.get("badges", "42")
        cache.get("badges", "missing")

        stats = cache.get_stats()
        assert stats.hits == 2
        assert stats.misses == 1
        assert stats.sets == 1
        assert stats.hit_rate == pytest.approx(2 / 3, rel=0.01)
        cache.close()

    def test_reset_stats(self):
        """Test stats reset."""
        cache = make_cache()

        cache.set("badges", "42", "value")
        cache.get("badges", "42")
        cache.sweep()

        cache.reset_stats()
        assert cache.get_stats().to_dict() == {
            "hits": 0,
            "misses": 0,
            "sets": 0,
            "expirations": 0,
            "swept": 0,
            "sweeps": 0,
            "hit_rate": 0.0,
        }
        cache.close()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
