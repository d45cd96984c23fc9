"""Fetch coordinator — pending-set dedup, batch jobs, completion notice."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from types import TracebackType

from PIL import Image

from thumbcache.cache.disk import DiskStore
from thumbcache.cache.keys import derive_key
from thumbcache.cache.memory import MemoryIndex
from thumbcache.concurrency.pool import FetchPool
from thumbcache.config.defaults import DEFAULT_BATCH_WORKERS, DEFAULT_MAX_CONCURRENT
from thumbcache.errors.exceptions import ThumbCacheError
from thumbcache.fetch.client import ImageFetcher
from thumbcache.types import BatchReport
from thumbcache.utils.image import decode_image

logger = logging.getLogger(__name__)

Notifier = Callable[[], None]


class FetchCoordinator:
    """Decides what to fetch, fetches each URL once per batch, publishes results.

    ``ensure_cached`` only records URLs; nothing is downloaded until the owner
    calls ``batch_download``. Each batch runs as one job on a worker thread
    and calls the notifier exactly once when every URL has been attempted.

    ``ensure_cached`` checks the memory index and then adds to the pending
    set without holding one lock across both steps. A batch finishing in
    between can cause one redundant download on the next batch; this is
    accepted.
    """

    def __init__(
        self,
        disk: DiskStore,
        memory: MemoryIndex,
        notifier: Notifier | None = None,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        batch_workers: int = DEFAULT_BATCH_WORKERS,
        fetcher_factory: Callable[[], ImageFetcher] | None = None,
        decode: Callable[[bytes], Image.Image] = decode_image,
    ) -> None:
        self._disk = disk
        self._memory = memory
        self._notifier = notifier
        self._fetcher_factory = fetcher_factory or ImageFetcher
        self._decode = decode
        self._pool = FetchPool(max_workers=max_concurrent)
        self._pending: set[str] = set()
        self._pending_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(
            max_workers=batch_workers,
            thread_name_prefix="thumbcache-batch",
        )

    @property
    def pending(self) -> frozenset[str]:
        """URLs queued for the next batch."""
        with self._pending_lock:
            return frozenset(self._pending)

    def ensure_cached(self, url: str) -> None:
        """Queue ``url`` for the next batch unless its image is already cached."""
        if self._memory.contains(derive_key(url)):
            return
        with self._pending_lock:
            self._pending.add(url)

    def lookup(self, url: str) -> Image.Image | None:
        """Non-blocking read for render paths. None means not available yet."""
        return self._memory.get(derive_key(url))

    def batch_download(self) -> Future[BatchReport]:
        """Start one background job for everything pending right now.

        A job is started even when nothing is pending, so the notifier always
        fires once per call. The returned future resolves to the job's report.
        """
        with self._pending_lock:
            urls = sorted(self._pending)
            self._pending = set()
        logger.info("Starting batch job for %d URL(s)", len(urls))
        return self._executor.submit(self._run_job, urls)

    def close(self) -> None:
        """Wait for in-flight batch jobs and stop the worker threads."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> FetchCoordinator:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _run_job(self, urls: list[str]) -> BatchReport:
        try:
            report = asyncio.run(self._run_batch(urls))
        finally:
            self._notify()
        logger.info(
            "Batch job finished: %d succeeded, %d failed",
            len(report.succeeded),
            len(report.failed),
        )
        return report

    async def _run_batch(self, urls: list[str]) -> BatchReport:
        report = BatchReport(urls=urls)
        if not urls:
            return report

        async with self._fetcher_factory() as fetcher:

            async def process(url: str) -> None:
                await self._process_url(fetcher, url)

            results = await self._pool.run(process, urls)

        for url, result in zip(urls, results, strict=True):
            if isinstance(result, ThumbCacheError):
                logger.warning("Skipping %s: %s", url, result)
                report.failed[url] = type(result).__name__
            elif isinstance(result, Exception):
                logger.error("Unexpected failure for %s", url, exc_info=result)
                report.failed[url] = type(result).__name__
            elif isinstance(result, BaseException):
                raise result
            else:
                report.succeeded.append(url)
        return report

    async def _process_url(self, fetcher: ImageFetcher, url: str) -> None:
        key = derive_key(url)
        data = await fetcher.fetch(url)
        await asyncio.to_thread(self._disk.write, key, data)
        image = await asyncio.to_thread(self._decode, data)
        self._memory.insert(key, image)

    def _notify(self) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier()
        except Exception:
            logger.exception("Batch-complete notifier raised")
