"""Top-level entry points: initialize() and the ThumbCache facade."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import Future
from functools import partial
from pathlib import Path
from types import TracebackType
from typing import Any

import httpx
from PIL import Image

from thumbcache.cache.disk import DiskStore
from thumbcache.cache.keys import derive_key
from thumbcache.cache.memory import MemoryIndex
from thumbcache.cache.stats import CacheStats
from thumbcache.config.schema import ThumbCacheConfig
from thumbcache.fetch.client import ImageFetcher
from thumbcache.fetch.coordinator import FetchCoordinator, Notifier
from thumbcache.types import Article, BatchReport
from thumbcache.utils.image import decode_image

logger = logging.getLogger(__name__)


class ThumbCache:
    """Image cache for a feed client, with full lifecycle control.

    Construct one per process and pass it to whatever needs thumbnails.
    Construction hydrates the memory index from the cache directory; no
    network access happens until ``batch_download`` is called.
    """

    def __init__(
        self,
        config: ThumbCacheConfig | None = None,
        notifier: Notifier | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or ThumbCacheConfig()
        self._disk = DiskStore(self._config.cache_dir)
        self._memory = MemoryIndex()
        self._memory.hydrate(self._disk.load_all(), decode_image)

        fetcher_factory = partial(
            ImageFetcher,
            timeout_seconds=self._config.timeout_seconds,
            max_retries=self._config.max_retries,
            user_agent=self._config.user_agent,
            max_image_mb=self._config.max_image_mb,
            transport=transport,
        )
        self._coordinator = FetchCoordinator(
            self._disk,
            self._memory,
            notifier=notifier,
            max_concurrent=self._config.max_concurrent,
            batch_workers=self._config.batch_workers,
            fetcher_factory=fetcher_factory,
        )

    @property
    def config(self) -> ThumbCacheConfig:
        return self._config

    @property
    def disk(self) -> DiskStore:
        return self._disk

    @property
    def memory(self) -> MemoryIndex:
        return self._memory

    @property
    def coordinator(self) -> FetchCoordinator:
        return self._coordinator

    def ensure_cached(self, url: str) -> None:
        self._coordinator.ensure_cached(url)

    def batch_download(self) -> Future[BatchReport]:
        return self._coordinator.batch_download()

    def lookup(self, url: str) -> Image.Image | None:
        return self._coordinator.lookup(url)

    def ensure_articles(self, articles: Iterable[Article]) -> Future[BatchReport]:
        """Queue every article's picture and start one batch for them.

        Articles without an embedded picture or their own fallback use the
        configured ``default_picture_url``.
        """
        default = self._config.default_picture_url
        for article in articles:
            self._coordinator.ensure_cached(article.resolve_picture_url(default))
        return self._coordinator.batch_download()

    def key_for(self, url: str) -> str:
        return derive_key(url)

    def stats(self) -> CacheStats:
        """Return aggregate cache statistics."""
        return CacheStats(
            entries=len(self._memory),
            hits=self._memory.hits,
            misses=self._memory.misses,
            disk_files=self._disk.entry_count,
            disk_size_mb=self._disk.size_mb,
        )

    def close(self) -> None:
        self._coordinator.close()

    def __enter__(self) -> ThumbCache:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def initialize(
    cache_dir: str | Path,
    notifier: Notifier | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    **settings: Any,
) -> ThumbCache:
    """Build a ThumbCache rooted at ``cache_dir``.

    Extra keyword settings override the corresponding ThumbCacheConfig fields.
    """
    config = ThumbCacheConfig(cache_dir=cache_dir, **settings)
    return ThumbCache(config=config, notifier=notifier, transport=transport)
