"""TowerStats Routes - API Endpoint URLs.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

DEFAULT_BASE_URL = "https://api.towerstats.com"


class Routes:
    """Builds endpoint URLs from a base URL.

    All endpoints take POST requests with a JSON body.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL):
        self.base_url = base_url.rstrip("/")

    def append(self, path: str) -> str:
        """Append a path to the base URL."""
        return f"{self.base_url}{path}"

    @property
    def badges(self) -> str:
        """Submit badge data for a user."""
        return self.append("/api/badges")

    @property
    def followers(self) -> str:
        """Fetch all followers of a user."""
        return self.append("/api/followers")

    @property
    def following(self) -> str:
        """Fetch all users a user is following."""
        return self.append("/api/following")

    @property
    def game_badges(self) -> str:
        """Fetch badges a user owns in a universe."""
        return self.append("/api/game_badges")

    def __repr__(self) -> str:
        return f"Routes(base_url={self.base_url!r})"


__all__ = ["Routes", "DEFAULT_BASE_URL"]
