"""Layered configuration: later sources override earlier ones.

Layers, in order:
  1. Package defaults
  2. Global config   (~/.thumbcache/config.yaml)
  3. Project config  (./thumbcache.yaml in the working directory)
  4. Environment variables (THUMBCACHE_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from thumbcache.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".thumbcache" / "config.yaml"
_PROJECT_CONFIG_NAME = "thumbcache.yaml"

# env var -> (config key, parser)
_ENV_MAP: dict[str, tuple[str, type]] = {
    "THUMBCACHE_CACHE_DIR": ("cache_dir", str),
    "THUMBCACHE_MAX_CONCURRENT": ("max_concurrent", int),
    "THUMBCACHE_BATCH_WORKERS": ("batch_workers", int),
    "THUMBCACHE_TIMEOUT": ("timeout_seconds", float),
    "THUMBCACHE_MAX_RETRIES": ("max_retries", int),
    "THUMBCACHE_MAX_IMAGE_MB": ("max_image_mb", float),
    "THUMBCACHE_USER_AGENT": ("user_agent", str),
    "THUMBCACHE_PICTURE_URL": ("default_picture_url", str),
    "THUMBCACHE_LOG_LEVEL": ("log_level", str),
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Merge defaults, YAML files, environment and runtime overrides.

    Runtime overrides set to None are treated as "not given".
    """
    config = get_defaults()
    for path in (_GLOBAL_CONFIG_PATH, Path.cwd() / _PROJECT_CONFIG_NAME):
        config.update(_load_yaml_config(path) or {})
    config.update(_load_env_vars())
    config.update({k: v for k, v in runtime_overrides.items() if v is not None})
    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML mapping, or None if the file is absent or unusable."""
    if not path.is_file():
        return None
    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
        return None
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring", path)
        return None
    logger.debug("Loaded config layer %s", path)
    return data


def _load_env_vars() -> dict[str, Any]:
    result: dict[str, Any] = {}
    for env_key, (config_key, parser) in _ENV_MAP.items():
        raw = os.environ.get(env_key)
        if raw is not None:
            result[config_key] = _coerce_env_value(env_key, raw, parser)
    return result


def _coerce_env_value(env_key: str, raw: str, parser: type) -> Any:
    """Parse an env var string; unparseable values pass through for validation."""
    try:
        return parser(raw)
    except ValueError:
        logger.warning("Cannot parse %s=%r as %s", env_key, raw, parser.__name__)
        return raw
