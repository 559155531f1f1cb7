from abc import ABC, abstractmethod


class SessionCacheError(Exception):
    """Cache transport or batch failure"""


class SessionCacheMissError(SessionCacheError):
    """No entry for the requested (user, cache key) pair"""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"session cache miss: {key}")


class ISessionCache(ABC):
    """Session snapshot cache keyed by (user_id, cache_key)

    Entries are a derived optimisation; the relational store stays the source
    of truth for permissions.
    """

    @abstractmethod
    async def store(self, user_id: str, cache_key: str, payload: str, ttl_seconds: int) -> None:
        """Write a serialized snapshot with a TTL"""
        pass

    @abstractmethod
    async def fetch(self, user_id: str, cache_key: str) -> str:
        """Read a snapshot. Raises SessionCacheMissError when absent."""
        pass

    @abstractmethod
    async def delete(self, user_id: str, cache_key: str) -> None:
        """Delete one snapshot"""
        pass

    @abstractmethod
    async def invalidate_all(self, user_id: str) -> int:
        """Delete every snapshot of a user. Returns the number of keys removed."""
        pass
