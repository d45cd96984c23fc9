"""L1 in-memory index of decoded images, guarded by a single lock."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable

from PIL import Image

from thumbcache.errors.exceptions import DecodeError

logger = logging.getLogger(__name__)


class MemoryIndex:
    """Key → decoded image map shared by the fetch path and render readers.

    Every map operation runs under one lock, held only for the dict access
    itself. Entries are never replaced or removed once inserted.
    """

    def __init__(self) -> None:
        self._store: dict[str, Image.Image] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def contains(self, key: str) -> bool:
        with self._lock:
            return key in self._store

    def get(self, key: str) -> Image.Image | None:
        with self._lock:
            image = self._store.get(key)
            if image is None:
                self._misses += 1
            else:
                self._hits += 1
            return image

    def insert(self, key: str, image: Image.Image) -> None:
        with self._lock:
            self._store[key] = image

    def hydrate(
        self,
        entries: Iterable[tuple[str, bytes]],
        decode: Callable[[bytes], Image.Image],
    ) -> int:
        """Decode and insert every ``(key, bytes)`` pair. Returns count loaded.

        Decoding happens outside the lock; entries that fail to decode are
        dropped.
        """
        loaded = 0
        for key, data in entries:
            try:
                image = decode(data)
            except DecodeError as e:
                logger.debug("Dropping undecodable cache file %s: %s", key, e)
                continue
            self.insert(key, image)
            loaded += 1
        logger.info("Hydrated %d cached image(s) from disk", loaded)
        return loaded

    @property
    def hits(self) -> int:
        with self._lock:
            return self._hits

    @property
    def misses(self) -> int:
        with self._lock:
            return self._misses

    def __len__(self) -> int:
        with self._lock:
            return len(self._store)
