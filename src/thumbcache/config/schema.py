"""Pydantic model for resolved thumbcache settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from thumbcache.config import defaults


class ThumbCacheConfig(BaseModel):
    """Validated settings for one cache instance."""

    cache_dir: Path = defaults.DEFAULT_CACHE_DIR
    max_concurrent: int = Field(default=defaults.DEFAULT_MAX_CONCURRENT, ge=1)
    batch_workers: int = Field(default=defaults.DEFAULT_BATCH_WORKERS, ge=1)
    timeout_seconds: float = Field(default=defaults.DEFAULT_TIMEOUT_SECONDS, gt=0)
    max_retries: int = Field(default=defaults.DEFAULT_MAX_RETRIES, ge=0)
    max_image_mb: float = Field(default=defaults.DEFAULT_MAX_IMAGE_MB, gt=0)
    user_agent: str = defaults.DEFAULT_USER_AGENT
    default_picture_url: str = defaults.DEFAULT_PICTURE_URL
    log_level: str = defaults.DEFAULT_LOG_LEVEL

    @field_validator("cache_dir", mode="before")
    @classmethod
    def _expand_cache_dir(cls, value: Any) -> Any:
        if isinstance(value, str | Path):
            return Path(value).expanduser()
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()
