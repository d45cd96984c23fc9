"""Cache key derivation — URL-addressed, filesystem-safe."""

from __future__ import annotations

import hashlib
import re

_KEY_PATTERN = re.compile(r"^[0-9a-f]{64}$")


def derive_key(url: str) -> str:
    """Return the SHA256 hex digest of a URL.

    The key identifies the URL, not the content behind it. It doubles as the
    on-disk file name, so it must never contain a path separator.
    """
    return hashlib.sha256(url.encode("utf-8")).hexdigest()


def is_cache_key(name: str) -> bool:
    """True if ``name`` has the shape of a key produced by derive_key."""
    return bool(_KEY_PATTERN.match(name))
