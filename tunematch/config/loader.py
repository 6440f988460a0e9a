"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  -- static defaults checked into the repo
  2. .env file           -- local developer overrides (not committed)
  3. Environment vars    -- set at deploy time

``load_config()`` reads the YAML file first, then deep-merges the values
resolved by :class:`Settings` on top.
"""

from pathlib import Path

import yaml

from tunematch.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    if settings is None:
        settings = Settings()
    env_overrides = {
        "app": {
            "env": settings.app_env,
        },
        "storage": {
            "database_path": settings.database_path,
        },
        "scoring": {
            "profile_limit": settings.profile_limit,
            "common_artists_limit": settings.common_artists_limit,
        },
        "discover": {
            "min_score": settings.discover_min_score,
            "top_artists": settings.discover_top_artists,
        },
        "cache": {
            "enabled": settings.compatibility_cache_enabled,
            "ttl": settings.compatibility_cache_ttl,
            "max_size": settings.compatibility_cache_size,
        },
        "retry": {
            "profile_fetch_attempts": settings.profile_fetch_attempts,
            "backoff_seconds": settings.retry_backoff_seconds,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
