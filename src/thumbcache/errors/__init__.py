"""Error handling — exceptions and HTTP error classification."""

from thumbcache.errors.exceptions import (
    DecodeError,
    StoreError,
    TerminalError,
    ThumbCacheError,
    TransientError,
)

__all__ = [
    "ThumbCacheError",
    "TransientError",
    "TerminalError",
    "StoreError",
    "DecodeError",
]
