"""Cache subsystem — two-tier (memory + disk) with URL-addressed keys."""

from thumbcache.cache.disk import DiskStore
from thumbcache.cache.keys import derive_key, is_cache_key
from thumbcache.cache.memory import MemoryIndex
from thumbcache.cache.stats import CacheStats

__all__ = [
    "CacheStats",
    "DiskStore",
    "MemoryIndex",
    "derive_key",
    "is_cache_key",
]
