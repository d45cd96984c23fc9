"""Tests for the settings model."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from thumbcache.config.defaults import get_defaults
from thumbcache.config.schema import ThumbCacheConfig


class TestThumbCacheConfig:
    def test_validates_defaults(self):
        config = ThumbCacheConfig.model_validate(get_defaults())
        assert config.max_concurrent == 4
        assert isinstance(config.cache_dir, Path)

    def test_expands_user(self):
        config = ThumbCacheConfig(cache_dir="~/thumbs")
        assert "~" not in str(config.cache_dir)

    def test_log_level_uppercased(self):
        assert ThumbCacheConfig(log_level="debug").log_level == "DEBUG"

    def test_rejects_zero_workers(self):
        with pytest.raises(ValidationError):
            ThumbCacheConfig(max_concurrent=0)

    def test_ignores_unknown_keys(self):
        config = ThumbCacheConfig.model_validate({"unknown": 1})
        assert not hasattr(config, "unknown")

    def test_zero_retries_allowed(self):
        assert ThumbCacheConfig(max_retries=0).max_retries == 0

    def test_rejects_negative_retries(self):
        with pytest.raises(ValidationError):
            ThumbCacheConfig(max_retries=-1)
