"""Async HTTP client for downloading image bytes."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from thumbcache.config.defaults import (
    DEFAULT_MAX_IMAGE_MB,
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
)
from thumbcache.errors.exceptions import TerminalError
from thumbcache.errors.retry import classify_http_error, classify_status, fetch_retrying

logger = logging.getLogger(__name__)

_CHUNK_SIZE = 64 * 1024


class ImageFetcher:
    """Downloads raw bytes for a URL, with retry on transient failures.

    The client is bound to the event loop that opens it, so a fetcher is
    created per batch job and used as an async context manager.
    """

    def __init__(
        self,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        user_agent: str = DEFAULT_USER_AGENT,
        max_image_mb: float = DEFAULT_MAX_IMAGE_MB,
        retry_backoff: float = 0.5,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._max_retries = max_retries
        self._retry_backoff = retry_backoff
        self._max_bytes = int(max_image_mb * 1024 * 1024)
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            follow_redirects=True,
            headers={"User-Agent": user_agent, "Accept": "image/*,*/*;q=0.8"},
            transport=transport,
        )

    async def __aenter__(self) -> ImageFetcher:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def fetch(self, url: str) -> bytes:
        """Download ``url`` and return its body.

        Raises TransientError once retries are exhausted, or TerminalError
        for errors retrying cannot fix.
        """
        async for attempt in fetch_retrying(self._max_retries, self._retry_backoff):
            with attempt:
                return await self._fetch_once(url)
        raise TerminalError(f"No fetch attempt made for {url}", error_type="unknown")

    async def _fetch_once(self, url: str) -> bytes:
        try:
            async with self._client.stream("GET", url) as response:
                if response.status_code >= 400:
                    raise classify_status(response)
                chunks: list[bytes] = []
                total = 0
                async for chunk in response.aiter_bytes(_CHUNK_SIZE):
                    total += len(chunk)
                    if total > self._max_bytes:
                        raise TerminalError(
                            f"Image at {url} exceeds {self._max_bytes} bytes",
                            error_type="too_large",
                        )
                    chunks.append(chunk)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise classify_http_error(e) from e
        logger.debug("Fetched %s (%d bytes)", url, total)
        return b"".join(chunks)

    async def close(self) -> None:
        await self._client.aclose()
