"""Retry policy for image fetches — classification plus tenacity backoff."""

from __future__ import annotations

import contextlib
import logging

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from thumbcache.errors.exceptions import TerminalError, ThumbCacheError, TransientError

logger = logging.getLogger(__name__)

_MAX_WAIT = 30.0  # seconds
_TRANSIENT_STATUSES = {408, 425, 429, 500, 502, 503, 504}


def classify_http_error(exc: Exception) -> ThumbCacheError:
    """Convert an httpx exception to our exception hierarchy."""
    if isinstance(exc, ThumbCacheError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        return classify_status(exc.response)
    if isinstance(exc, httpx.TimeoutException):
        return TransientError(str(exc), error_type="timeout", original=exc)
    if isinstance(exc, httpx.TransportError):
        # ConnectError, ReadError, RemoteProtocolError, ...
        if isinstance(exc, httpx.UnsupportedProtocol):
            return TerminalError(str(exc), error_type="bad_url")
        return TransientError(str(exc), error_type="connection", original=exc)
    if isinstance(exc, httpx.InvalidURL):
        return TerminalError(str(exc), error_type="bad_url")
    return TerminalError(str(exc), error_type="unknown")


def classify_status(response: httpx.Response) -> ThumbCacheError:
    """Map a non-2xx response to a Transient or Terminal error."""
    status = response.status_code
    message = f"HTTP {status} for {response.request.url}"
    if status in _TRANSIENT_STATUSES:
        retry_after = None
        retry_after_str = response.headers.get("retry-after")
        if retry_after_str:
            with contextlib.suppress(ValueError):
                retry_after = float(retry_after_str)
        return TransientError(
            message,
            error_type="rate_limit" if status == 429 else "server_error",
            http_status=status,
            retry_after=retry_after,
        )
    error_type = "not_found" if status == 404 else "http_error"
    return TerminalError(message, error_type=error_type, http_status=status)


def fetch_retrying(max_retries: int = 3, backoff: float = 0.5) -> AsyncRetrying:
    """Build the tenacity controller used around a single URL fetch.

    One initial attempt plus up to ``max_retries`` retries. Only
    TransientError is retried; a server-provided Retry-After wins over
    the exponential schedule.
    """
    max_attempts = max(0, max_retries) + 1
    exponential = wait_exponential(multiplier=backoff, min=backoff, max=_MAX_WAIT)

    def _wait(retry_state: RetryCallState) -> float:
        outcome = retry_state.outcome
        exc = outcome.exception() if outcome is not None else None
        if isinstance(exc, TransientError) and exc.retry_after is not None:
            return min(exc.retry_after, _MAX_WAIT)
        return exponential(retry_state)

    def _log(retry_state: RetryCallState) -> None:
        exc = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Transient fetch error (attempt %d/%d): %s",
            retry_state.attempt_number,
            max_attempts,
            getattr(exc, "error_type", exc),
        )

    return AsyncRetrying(
        retry=retry_if_exception_type(TransientError),
        wait=_wait,
        stop=stop_after_attempt(max_attempts),
        before_sleep=_log,
        reraise=True,
    )
