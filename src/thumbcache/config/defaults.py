"""Package-level default configuration values."""

from __future__ import annotations

from pathlib import Path
from typing import Any

# Default cache settings
DEFAULT_CACHE_DIR = Path.home() / ".thumbcache" / "images"

# Default fetch settings
DEFAULT_MAX_CONCURRENT = 4
DEFAULT_BATCH_WORKERS = 2
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_MAX_RETRIES = 3
DEFAULT_MAX_IMAGE_MB = 10.0
DEFAULT_USER_AGENT = "thumbcache/0.1 (+https://pypi.org/project/thumbcache/)"

# Picture used for articles with no embedded image
DEFAULT_PICTURE_URL = "https://www.cbc.ca/a/favicon.ico"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_dir": str(DEFAULT_CACHE_DIR),
        "max_concurrent": DEFAULT_MAX_CONCURRENT,
        "batch_workers": DEFAULT_BATCH_WORKERS,
        "timeout_seconds": DEFAULT_TIMEOUT_SECONDS,
        "max_retries": DEFAULT_MAX_RETRIES,
        "max_image_mb": DEFAULT_MAX_IMAGE_MB,
        "user_agent": DEFAULT_USER_AGENT,
        "default_picture_url": DEFAULT_PICTURE_URL,
        "log_level": DEFAULT_LOG_LEVEL,
    }
