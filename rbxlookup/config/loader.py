"""YAML configuration loader with environment variable overrides.

Configuration is loaded in layers (later layers override earlier):

  1. config/config.yaml  - static defaults checked into the repo
  2. .env file           - local developer overrides (not committed)
  3. Environment vars    - set at deploy time

The YAML file holds values that rarely change per deployment (upstream
endpoint URLs, thumbnail parameters); the environment holds everything
operators tune (timeouts, TTLs, paths).
"""

from pathlib import Path

import yaml

from rbxlookup.config.settings import Settings

DEFAULT_CONFIG: dict = {
    "roblox": {
        "users_base_url": "https://users.roblox.com",
        "thumbnails_base_url": "https://thumbnails.roblox.com",
        "friends_base_url": "https://friends.roblox.com",
        "avatar_size": "150x150",
        "avatar_format": "Png",
        "avatar_circular": True,
        "username_history_limit": 10,
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config: dict = {}
    _deep_merge(config, DEFAULT_CONFIG)

    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
        _deep_merge(config, yaml_config)

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "storage": {
            "database_path": settings.database_path,
        },
        "cache": {
            "ttl_seconds": settings.cache_ttl_seconds,
        },
        "search_history": {
            "default_limit": settings.search_history_default_limit,
        },
        "upstream": {
            "timeout_seconds": settings.upstream_timeout_seconds,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        elif isinstance(value, dict):
            base[key] = {}
            _deep_merge(base[key], value)
        else:
            base[key] = value
