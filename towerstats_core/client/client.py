"""TowerStats Client - Cached API Client.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple, Union

import httpx

from towerstats_core.cache.cache import CacheConfig, CacheManager
from towerstats_core.client.exceptions import TowerStatsConnectionError, TowerStatsError
from towerstats_core.client.routes import Routes

logger = logging.getLogger(__name__)

UserId = Union[int, str]
BadgeId = Union[int, str]
UniverseId = Union[int, str]

# [badge_id, completion_date]; unowned badges are left out
BadgesResponse = List[Tuple[BadgeId, str]]
# User ids come back as strings
FollowersResponse = List[str]


class TowerStatsClient:
    """TowerStats API client.

    Results of every endpoint are cached per user, in one namespace per
    endpoint, for the cache's lifespan. Failed requests leave the cache
    untouched.

    Example:
        with TowerStatsClient("my-api-key") as client:
            followers = client.followers(1234)
            followers = client.followers(1234)  # served from cache
    """

    BADGES_NAMESPACE = "badges"
    GAME_BADGES_NAMESPACE = "game_badges"
    FOLLOWERS_NAMESPACE = "followers"
    FOLLOWING_NAMESPACE = "following"

    def __init__(
        self,
        api_key: str,
        cache: Optional[CacheManager] = None,
        cache_config: Optional[CacheConfig] = None,
        routes: Optional[Routes] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """Initialize client.

        Args:
            api_key: TowerStats API key
            cache: Shared cache; when omitted the client creates and owns one
            cache_config: Configuration for the owned cache
            routes: Endpoint URL builder
            timeout: Request timeout in seconds
            transport: Custom httpx transport
        """
        self._api_key = api_key
        self._owns_cache = cache is None
        self.cache = cache if cache is not None else CacheManager(cache_config)
        self.routes = routes or Routes()
        self._http = httpx.Client(timeout=timeout, transport=transport)

    def get_api_key(self) -> str:
        """Get the API key in use."""
        return self._api_key

    def swap_api_key(self, api_key: str) -> None:
        """Replace the API key used for further requests."""
        self._api_key = api_key

    def badges(self, user_id: UserId, badge_ids: Sequence[BadgeId]) -> BadgesResponse:
        """Submit badge data for a user.

        Args:
            user_id: Roblox user ID
            badge_ids: Roblox badge IDs to check

        Returns:
            Owned badges with their completion dates
        """
        key = f"{user_id}:{','.join(str(b) for b in badge_ids)}"
        return self._cached(
            self.BADGES_NAMESPACE,
            key,
            self.routes.badges,
            {"id": user_id, "badges": list(badge_ids)},
        )

    def game_badges(self, user_id: UserId, universe_id: UniverseId) -> BadgesResponse:
        """Fetch all badges a user owns in a universe.

        Args:
            user_id: Roblox user ID
            universe_id: Roblox universe ID

        Returns:
            Owned badges with their completion dates
        """
        return self._cached(
            self.GAME_BADGES_NAMESPACE,
            f"{user_id}:{universe_id}",
            self.routes.game_badges,
            {"id": user_id, "universe_id": universe_id},
        )

    def followers(self, user_id: UserId) -> FollowersResponse:
        """Fetch all followers of a user."""
        return self._cached(
            self.FOLLOWERS_NAMESPACE, str(user_id), self.routes.followers, {"id": user_id}
        )

    def following(self, user_id: UserId) -> FollowersResponse:
        """Fetch all users a user is following."""
        return self._cached(
            self.FOLLOWING_NAMESPACE, str(user_id), self.routes.following, {"id": user_id}
        )

    def _cached(self, namespace: str, key: str, url: str, payload: dict) -> Any:
        """Serve from cache, or request and cache the result."""
        value = self.cache.get(namespace, key)
        if value is not None:
            logger.debug(f"Cache hit {namespace}:{key}")
            return value

        value = self._post(url, payload)
        self.cache.set(namespace, key, value)
        return value

    def _post(self, url: str, payload: dict) -> Any:
        """POST a JSON payload and decode the JSON answer.

        Raises:
            TowerStatsConnectionError: On transport failure
            TowerStatsError: On a non-2xx response
        """
        try:
            response = self._http.post(url, json=payload, headers={"apiKey": self._api_key})
        except httpx.TransportError as e:
            raise TowerStatsConnectionError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            logger.warning(f"POST {url} returned {response.status_code}")
            raise TowerStatsError.from_response(response.status_code, response.text)

        return response.json()

    def close(self) -> None:
        """Close the HTTP client and stop the owned cache's sweeper."""
        self._http.close()
        if self._owns_cache:
            self.cache.close()

    def __enter__(self) -> "TowerStatsClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"TowerStatsClient(routes={self.routes!r}, cache={self.cache!r})"


__all__ = [
    "TowerStatsClient",
    "BadgesResponse",
    "FollowersResponse",
]
