"""TowerStats Cache Entry - Timestamped Cache Entry.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class CacheEntry:
    """A cached value and the instant it was last written.

    Attributes:
        value: Cached value, stored as-is
        timestamp: Clock reading at the last write
    """

    value: Any
    timestamp: float

    def age(self, now: float) -> float:
        """Get entry age in seconds.

        Args:
            now: Current clock reading

        Returns:
            Seconds since the last write
        """
        return now - self.timestamp

    def is_expired(self, lifespan: float, now: float) -> bool:
        """Check if entry has outlived the lifespan.

        Args:
            lifespan: Maximum age in seconds
            now: Current clock reading

        Returns:
            True if older than lifespan
        """
        return self.age(now) > lifespan

    def __repr__(self) -> str:
        return f"CacheEntry(value={self.value!r}, timestamp={self.timestamp:.3f})"


__all__ = ["CacheEntry"]
