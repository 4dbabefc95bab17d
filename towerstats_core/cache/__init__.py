"""Cache module - Namespaced expiring cache with a background sweeper."""

from towerstats_core.cache.entry import CacheEntry
from towerstats_core.cache.namespace import Namespace
from towerstats_core.cache.cache import (
    CacheManager,
    CacheConfig,
    CacheStats,
)

__all__ = [
    "CacheEntry",
    "Namespace",
    "CacheManager",
    "CacheConfig",
    "CacheStats",
]
