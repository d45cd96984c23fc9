"""Durable blob store: one file per cache key in a flat directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path
from uuid import uuid4

from thumbcache.cache.keys import is_cache_key
from thumbcache.errors.exceptions import StoreError

logger = logging.getLogger(__name__)

_PARTIAL_SUFFIX = ".part"


class DiskStore:
    """Raw downloaded bytes, stored undecoded under their cache key.

    There is no manifest and no expiry; whatever is in the directory is the
    cache. Nothing is ever deleted.
    """

    def __init__(self, cache_dir: str | Path) -> None:
        self._cache_dir = Path(cache_dir).expanduser()
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    @property
    def cache_dir(self) -> Path:
        return self._cache_dir

    def path_for(self, key: str) -> Path:
        return self._cache_dir / key

    def write(self, key: str, data: bytes) -> Path:
        """Create or overwrite the file for ``key``.

        Raises StoreError on permission or disk-space failure. The bytes go to
        a temp file first and are renamed into place, so a reader never sees a
        half-written file under a real key.
        """
        target = self.path_for(key)
        partial = target.with_name(f"{target.name}.{uuid4().hex}{_PARTIAL_SUFFIX}")
        try:
            with open(partial, "wb") as f:
                f.write(data)
            os.replace(partial, target)
        except OSError as e:
            partial.unlink(missing_ok=True)
            raise StoreError(f"Failed to write {target}: {e}", key=key, original=e) from e
        return target

    def load_all(self) -> Iterator[tuple[str, bytes]]:
        """Yield ``(key, bytes)`` for every regular file in the directory.

        Unreadable files are skipped. Calling it again starts a fresh scan.
        """
        try:
            paths = sorted(self._cache_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot list cache directory %s: %s", self._cache_dir, e)
            return

        for path in paths:
            if path.name.endswith(_PARTIAL_SUFFIX) or not path.is_file():
                continue
            try:
                data = path.read_bytes()
            except OSError as e:
                logger.debug("Skipping unreadable cache file %s: %s", path, e)
                continue
            if not is_cache_key(path.name):
                logger.debug("Cache file %s is not named by a URL key", path.name)
            yield path.name, data

    @property
    def entry_count(self) -> int:
        return sum(1 for _ in self._iter_files())

    @property
    def size_mb(self) -> float:
        total = 0
        for path in self._iter_files():
            try:
                total += path.stat().st_size
            except OSError:
                continue
        return total / (1024 * 1024)

    def _iter_files(self) -> Iterator[Path]:
        try:
            paths = list(self._cache_dir.iterdir())
        except OSError as e:
            logger.warning("Cannot list cache directory %s: %s", self._cache_dir, e)
            return
        for path in paths:
            if path.is_file() and not path.name.endswith(_PARTIAL_SUFFIX):
                yield path
