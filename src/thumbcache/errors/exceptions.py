"""Custom exception hierarchy for thumbcache."""

from __future__ import annotations

from typing import Any


class ThumbCacheError(Exception):
    """Base exception for all thumbcache errors."""

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        super().__init__(message)
        self.message = message


class TransientError(ThumbCacheError):
    """Transient fetch error — safe to retry with backoff.

    Examples: 429 rate limit, 500/502/503 server error, timeout, connection error.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "server_error",
        http_status: int | None = None,
        retry_after: float | None = None,
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status
        self.retry_after = retry_after
        self.original = original


class TerminalError(ThumbCacheError):
    """Terminal fetch error — retrying will not help.

    Examples: 404 not found, 403 forbidden, malformed URL, oversized body.
    """

    def __init__(
        self,
        message: str = "",
        error_type: str = "not_found",
        http_status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.error_type = error_type
        self.http_status = http_status


class StoreError(ThumbCacheError):
    """Writing a blob to the cache directory failed (permissions, disk full)."""

    def __init__(
        self,
        message: str = "",
        key: str = "",
        original: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.original = original


class DecodeError(ThumbCacheError):
    """Bytes could not be decoded into an image."""
