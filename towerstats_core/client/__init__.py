"""Client module - TowerStats API client backed by the cache."""

from towerstats_core.client.client import (
    TowerStatsClient,
    BadgesResponse,
    FollowersResponse,
)
from towerstats_core.client.exceptions import (
    TowerStatsError,
    TowerStatsConnectionError,
)
from towerstats_core.client.routes import Routes, DEFAULT_BASE_URL

__all__ = [
    "TowerStatsClient",
    "BadgesResponse",
    "FollowersResponse",
    "TowerStatsError",
    "TowerStatsConnectionError",
    "Routes",
    "DEFAULT_BASE_URL",
]
