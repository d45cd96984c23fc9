"""thumbcache — lazy, durable thumbnail cache for feed readers."""

from thumbcache.cache.keys import derive_key
from thumbcache.config.schema import ThumbCacheConfig
from thumbcache.core import ThumbCache, initialize
from thumbcache.types import Article, BatchReport

__all__ = [
    "Article",
    "BatchReport",
    "ThumbCache",
    "ThumbCacheConfig",
    "derive_key",
    "initialize",
]
