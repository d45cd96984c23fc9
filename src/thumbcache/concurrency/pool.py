"""Bounded async pool for fetching a batch of URLs."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FetchPool:
    """Semaphore-bounded async dispatcher over a list of URLs.

    Every URL is attempted; a failure for one URL is returned in its slot
    instead of cancelling the rest.
    """

    def __init__(self, max_workers: int = 4) -> None:
        self._max_workers = max(1, max_workers)

    @property
    def max_workers(self) -> int:
        return self._max_workers

    async def run(
        self,
        fn: Callable[[str], Awaitable[T]],
        urls: list[str],
    ) -> list[T | BaseException]:
        """Run ``fn(url)`` for each URL. Results are in input order."""
        semaphore = asyncio.Semaphore(self._max_workers)

        async def worker(url: str) -> T:
            async with semaphore:
                return await fn(url)

        results = await asyncio.gather(*(worker(u) for u in urls), return_exceptions=True)
        for url, result in zip(urls, results, strict=True):
            if isinstance(result, BaseException):
                logger.debug("Worker for %s raised %r", url, result)
        return results
