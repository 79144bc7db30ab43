from shipyard.common.cache.cache import MemoryCache, TokenCache

__all__ = ["MemoryCache", "TokenCache"]
