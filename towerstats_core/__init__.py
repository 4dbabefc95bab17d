"""TowerStats Core - Cached TowerStats API Client.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

An API client for TowerStats with an in-process result cache:
- Namespaced key/value storage, one namespace per endpoint
- Fixed lifespan expiration, checked on every read
- Background sweeper reclaiming entries nobody reads again
- Enable/disable switch making every cache operation inert

Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                  TowerStatsClient                   │
    │       badges / game_badges / followers / following  │
    └──────────────┬─────────────────────────┬────────────┘
                   │                         │
    ┌──────────────┴──────────┐   ┌──────────┴──────────┐
    │      CacheManager       │   │     httpx.Client    │
    │  get / set / has        │   │   POST JSON, apiKey │
    │  ┌───────────────────┐  │   └─────────────────────┘
    │  │ Namespace → Entry │  │
    │  └───────────────────┘  │
    │  Sweeper thread         │
    └─────────────────────────┘

Example Usage:
    from towerstats_core import CacheManager, TowerStatsClient

    # Standalone cache
    cache = CacheManager(lifespan=60)
    cache.set("followers", "42", ["1", "2"])
    cache.get("followers", "42")
    cache.close()

    # Client with its own cache
    with TowerStatsClient("my-api-key") as client:
        client.followers(42)
"""

__version__ = "1.0.0"
__author__ = "BlackRoad OS"

from towerstats_core.cache.entry import CacheEntry
from towerstats_core.cache.namespace import Namespace
from towerstats_core.cache.cache import (
    CacheManager,
    CacheConfig,
    CacheStats,
)
from towerstats_core.client.client import (
    TowerStatsClient,
    BadgesResponse,
    FollowersResponse,
)
from towerstats_core.client.exceptions import (
    TowerStatsError,
    TowerStatsConnectionError,
)
from towerstats_core.client.routes import Routes

__all__ = [
    # Cache
    "CacheManager",
    "CacheConfig",
    "CacheStats",
    "CacheEntry",
    "Namespace",
    # Client
    "TowerStatsClient",
    "BadgesResponse",
    "FollowersResponse",
    "TowerStatsError",
    "TowerStatsConnectionError",
    "Routes",
]
