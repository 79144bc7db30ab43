"""
Key/value cache used for installation access tokens.

The surrounding application may provide any store implementing ``TokenCache``;
``MemoryCache`` is the in-process default.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class TokenCache(ABC):
    """Asynchronous get/set store for string values."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the cached value for key, or None on a miss."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        pass


class MemoryCache(TokenCache):
    """In-memory cache with a fixed time-to-live per entry."""

    def __init__(self, namespace: str = "default", ttl_seconds: Optional[float] = None):
        """
        Initialize memory cache.

        Args:
            namespace: Name used in log messages to tell caches apart
            ttl_seconds: Entry lifetime; None keeps entries until cleared
        """
        self.namespace = namespace
        self.ttl_seconds = ttl_seconds
        self._entries: Dict[str, Tuple[str, Optional[float]]] = {}

    async def get(self, key: str) -> Optional[str]:
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() >= expires_at:
            logger.debug(f"Cache entry {self.namespace}:{key} expired")
            del self._entries[key]
            return None

        return value

    async def set(self, key: str, value: str) -> None:
        expires_at = None
        if self.ttl_seconds is not None:
            expires_at = time.monotonic() + self.ttl_seconds
        self._entries[key] = (value, expires_at)

    def clear(self, key: Optional[str] = None) -> None:
        """
        Clear cached entries.

        Args:
            key: If provided, clear only this entry. If None, clear everything.
        """
        if key is not None:
            self._entries.pop(key, None)
        else:
            self._entries.clear()
        logger.info(f"Cleared {'entry ' + key if key is not None else 'all entries'} in cache {self.namespace}")

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
