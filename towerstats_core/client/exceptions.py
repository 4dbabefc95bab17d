"""TowerStats Client Exceptions.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Hierarchy::

    TowerStatsError
    +-- TowerStatsConnectionError
"""

from __future__ import annotations

from typing import Optional


class TowerStatsError(Exception):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status_code: HTTP status, or None for transport failures
        body: Response body text
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "TowerStatsError":
        """Create from a failed response."""
        return cls(f"Error {status_code}: {body}", status_code=status_code, body=body)


class TowerStatsConnectionError(TowerStatsError):
    """Raised on network-level failures (timeout, DNS, refused connection)."""


__all__ = ["TowerStatsError", "TowerStatsConnectionError"]
