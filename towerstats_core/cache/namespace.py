"""TowerStats Cache Namespace - Key Isolation.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from towerstats_core.cache.entry import CacheEntry


class Namespace:
    """Cache namespace for key isolation.

    Namespaces keep different kinds of cached results apart, so the
    same key string can live in several namespaces without colliding.

    Not thread-safe on its own; the owning CacheManager serializes
    access under its lock.
    """

    def __init__(self, name: str):
        """Initialize namespace.

        Args:
            name: Namespace name
        """
        self.name = name
        self._entries: Dict[str, CacheEntry] = {}

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        """Get raw entry by key.

        Args:
            key: Cache key

        Returns:
            CacheEntry or None
        """
        return self._entries.get(key)

    def put(self, key: str, entry: CacheEntry) -> None:
        """Insert or overwrite an entry.

        Args:
            key: Cache key
            entry: Cache entry
        """
        self._entries[key] = entry

    def remove(self, key: str) -> bool:
        """Remove an entry.

        Args:
            key: Cache key

        Returns:
            True if removed
        """
        return self._entries.pop(key, None) is not None

    def purge_expired(self, lifespan: float, now: float) -> int:
        """Remove every entry older than lifespan.

        Args:
            lifespan: Maximum age in seconds
            now: Current clock reading

        Returns:
            Number of entries removed
        """
        count = 0
        for key in list(self._entries.keys()):
            if self._entries[key].is_expired(lifespan, now):
                del self._entries[key]
                count += 1
        return count

    def clear(self) -> int:
        """Clear all entries.

        Returns:
            Number of entries cleared
        """
        count = len(self._entries)
        self._entries.clear()
        return count

    def keys(self) -> List[str]:
        """Get all keys, expired or not."""
        return list(self._entries.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __repr__(self) -> str:
        return f"Namespace(name={self.name!r}, entries={len(self._entries)})"


__all__ = ["Namespace"]
