"""TowerStats Cache - Namespaced Expiring Cache Manager.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import dataclasses
import logging
import threading
import time
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional

from towerstats_core.cache.entry import CacheEntry
from towerstats_core.cache.namespace import Namespace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheConfig:
    """Cache configuration.

    Attributes:
        enabled: Whether the cache stores anything at all
        sweeper_interval: Seconds between sweeper runs
        lifespan: Seconds an entry stays live after its last write
    """

    enabled: bool = True
    sweeper_interval: float = 1.0
    lifespan: float = 3 * 60.0

    def __post_init__(self):
        if self.sweeper_interval <= 0:
            raise ValueError(
                f"sweeper_interval must be positive, got {self.sweeper_interval}"
            )
        if self.lifespan < 0:
            raise ValueError(f"lifespan must not be negative, got {self.lifespan}")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CacheConfig":
        """Create from a partial mapping.

        Missing keys take their defaults; unknown keys are ignored.

        Args:
            data: Dictionary data

        Returns:
            CacheConfig instance
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"Ignoring unknown cache config keys: {', '.join(unknown)}")
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return dataclasses.asdict(self)


@dataclass
class CacheStats:
    """Cache statistics.

    Attributes:
        hits: Number of cache hits
        misses: Number of cache misses
        sets: Number of set operations
        expirations: Entries dropped on read because they were stale
        swept: Entries removed by the sweeper
        sweeps: Number of sweeper runs
        started_at: When cache started
    """

    hits: int = 0
    misses: int = 0
    sets: int = 0
    expirations: int = 0
    swept: int = 0
    sweeps: int = 0
    started_at: Optional[datetime] = None

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def reset(self) -> None:
        """Reset statistics."""
        self.hits = 0
        self.misses = 0
        self.sets = 0
        self.expirations = 0
        self.swept = 0
        self.sweeps = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "sets": self.sets,
            "expirations": self.expirations,
            "swept": self.swept,
            "sweeps": self.sweeps,
            "hit_rate": self.hit_rate,
        }


class CacheManager:
    """Memory based cache with namespaces and a background sweeper.

    Entries expire a fixed lifespan after their last write. Reads check
    the age themselves and drop stale entries on the spot, so a value
    past its lifespan is never returned; the sweeper only reclaims
    memory held by entries nobody reads again.

    When the config is disabled every operation is inert: reads miss,
    writes are dropped and no sweeper thread is started.

    Example:
        cache = CacheManager(lifespan=60)

        cache.set("followers", "42", ["1", "2"])
        cache.get("followers", "42")   # ["1", "2"]
        cache.get("badges", "42")      # None

        cache.close()
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        clock: Callable[[], float] = time.time,
        **overrides: Any,
    ):
        """Initialize cache and start the sweeper.

        Args:
            config: Cache configuration
            clock: Time source for entry timestamps
            **overrides: Config fields replacing those of ``config``
        """
        config = config or CacheConfig()
        if overrides:
            config = dataclasses.replace(config, **overrides)
        self.config = config
        self._clock = clock

        self._namespaces: Dict[str, Namespace] = {}
        self._lock = threading.RLock()
        self._stats = CacheStats(started_at=datetime.now())

        # Sweeper thread
        self._sweeper_lock = threading.RLock()
        self._sweeper_thread: Optional[threading.Thread] = None
        self._stop_event: Optional[threading.Event] = None

        self.start_sweeper()

    @property
    def enabled(self) -> bool:
        """Whether the cache is enabled."""
        return self.config.enabled

    def _namespace(self, name: str) -> Namespace:
        """Get or lazily create a namespace. Caller holds the lock."""
        namespace = self._namespaces.get(name)
        if namespace is None:
            namespace = Namespace(name)
            self._namespaces[name] = namespace
        return namespace

    def get(self, namespace: str, key: str) -> Any:
        """Get an item from the cache.

        The stored value is returned as-is, not copied.

        Args:
            namespace: Namespace the item resides in
            key: Item key

        Returns:
            Cached value, or None when absent or expired
        """
        if not self.config.enabled:
            return None

        with self._lock:
            ns = self._namespace(namespace)
            entry = ns.get_entry(key)

            if entry is None:
                self._stats.misses += 1
                return None

            if entry.is_expired(self.config.lifespan, self._clock()):
                ns.remove(key)
                self._stats.misses += 1
                self._stats.expirations += 1
                logger.debug(f"Expired {namespace}:{key} on read")
                return None

            self._stats.hits += 1
            return entry.value

    def set(self, namespace: str, key: str, value: Any) -> None:
        """Set an item's value, resetting its age.

        Args:
            namespace: Namespace the item resides in
            key: Item key
            value: New value
        """
        if not self.config.enabled:
            return

        with self._lock:
            self._namespace(namespace).put(key, CacheEntry(value, self._clock()))
            self._stats.sets += 1

    def has(self, namespace: str, key: str) -> bool:
        """Check if an item is present in a namespace.

        This is a raw presence check: an entry past its lifespan that
        neither a read nor the sweeper has removed yet still counts.
        Use :meth:`has_fresh` to also check the age.

        Args:
            namespace: Namespace to check in
            key: Item key

        Returns:
            True if present
        """
        if not self.config.enabled:
            return False

        with self._lock:
            return key in self._namespace(namespace)

    def has_fresh(self, namespace: str, key: str) -> bool:
        """Check if an item is present and within its lifespan.

        Args:
            namespace: Namespace to check in
            key: Item key

        Returns:
            True if :meth:`get` would return the item
        """
        if not self.config.enabled:
            return False

        with self._lock:
            entry = self._namespace(namespace).get_entry(key)
            return entry is not None and not entry.is_expired(
                self.config.lifespan, self._clock()
            )

    def start_sweeper(self) -> None:
        """Start the sweeper, restarting it if already running."""
        if not self.config.enabled:
            return

        with self._sweeper_lock:
            self.stop_sweeper()

            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._sweeper_loop,
                args=(stop_event,),
                daemon=True,
                name=f"CacheManager-{id(self):x}-sweeper",
            )
            self._stop_event = stop_event
            self._sweeper_thread = thread
            thread.start()

        logger.info(f"Cache sweeper started (interval={self.config.sweeper_interval}s)")

    def stop_sweeper(self) -> None:
        """Stop the sweeper.

        Once this returns no further sweep runs happen. Safe to call
        when the sweeper is not running.
        """
        if not self.config.enabled:
            return

        with self._sweeper_lock:
            thread, stop_event = self._sweeper_thread, self._stop_event
            self._sweeper_thread = None
            self._stop_event = None

            if thread is None:
                return

            stop_event.set()
            if thread is not threading.current_thread():
                thread.join()

        logger.info("Cache sweeper stopped")

    @property
    def is_sweeper_running(self) -> bool:
        """Whether a sweeper thread is active."""
        with self._sweeper_lock:
            return self._sweeper_thread is not None and self._sweeper_thread.is_alive()

    def _sweeper_loop(self, stop_event: threading.Event) -> None:
        """Background sweep loop."""
        while not stop_event.wait(self.config.sweeper_interval):
            try:
                self.sweep()
            except Exception as e:
                logger.error(f"Sweep error: {e}")

    def sweep(self) -> int:
        """Remove expired entries from every namespace.

        Returns:
            Number removed
        """
        count = 0
        with self._lock:
            now = self._clock()
            for namespace in self._namespaces.values():
                count += namespace.purge_expired(self.config.lifespan, now)
            self._stats.swept += count
            self._stats.sweeps += 1

        if count:
            logger.debug(f"Swept {count} expired entries")
        return count

    def namespaces(self) -> List[str]:
        """List namespace names.

        Returns:
            Names of every namespace touched so far
        """
        with self._lock:
            return list(self._namespaces.keys())

    def size(self) -> int:
        """Get stored entry count, expired or not.

        Returns:
            Number of entries across namespaces
        """
        with self._lock:
            return sum(len(ns) for ns in self._namespaces.values())

    def clear(self, namespace: Optional[str] = None) -> int:
        """Clear entries.

        Args:
            namespace: Only clear this namespace

        Returns:
            Number of entries cleared
        """
        with self._lock:
            if namespace is not None:
                ns = self._namespaces.get(namespace)
                return ns.clear() if ns is not None else 0
            return sum(ns.clear() for ns in self._namespaces.values())

    def get_stats(self) -> CacheStats:
        """Get cache statistics.

        Returns:
            CacheStats instance
        """
        return self._stats

    def reset_stats(self) -> None:
        """Reset statistics."""
        self._stats.reset()

    def close(self) -> None:
        """Tear down the cache, stopping the sweeper."""
        self.stop_sweeper()

    def __enter__(self) -> "CacheManager":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()

    def __repr__(self) -> str:
        return (
            f"CacheManager(enabled={self.config.enabled}, "
            f"namespaces={len(self._namespaces)}, entries={self.size()})"
        )


__all__ = ["CacheManager", "CacheConfig", "CacheStats"]
