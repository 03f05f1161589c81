"""
Configuration loader for xdapp.yml.
"""

from __future__ import annotations

import logging
import threading
import time
from pathlib import Path

import yaml

from xdapp.config.models import ResourceSettings
from xdapp.config.settings import get_env

logger = logging.getLogger("xdapp")

# Configuration paths
CONFIG_PATH = Path(get_env("config_path", "/etc/xdapp") or "/etc/xdapp")
RESOURCE_CONFIG_FILE = CONFIG_PATH / "xdapp.yml"


class ResourceConfig:
    """Manages resource configuration from YAML file."""

    _lock = threading.Lock()
    _config: dict = {}
    _typed_config: ResourceSettings | None = None
    _last_load: float = 0
    _cache_duration: int = 60

    @classmethod
    def load(cls) -> dict:
        """Load resource configuration from YAML file."""
        now = time.time()
        if cls._config and (now - cls._last_load) < cls._cache_duration:
            return cls._config

        with cls._lock:
            # Double-check after acquiring the lock
            now = time.time()
            if cls._config and (now - cls._last_load) < cls._cache_duration:
                return cls._config
            return cls._load_locked(now)

    @classmethod
    def _load_locked(cls, now: float) -> dict:
        """Load config while holding ``_lock``. Called from :meth:`load`."""
        defaults = {
            "broker": {
                "base_url": "http://localhost/Citrix/BrokerAdmin",
                "verify_tls": True,
                "timeout": None,
                "api_key": "",
            },
            "logging": {"level": "INFO", "json_output": True},
        }

        if not RESOURCE_CONFIG_FILE.exists():
            logger.info(f"Resource config not found, using defaults: {RESOURCE_CONFIG_FILE}")
            cls._config = cls._apply_env(defaults)
            cls._typed_config = ResourceSettings.model_validate(cls._config)
            cls._last_load = now
            return cls._config

        try:
            with open(RESOURCE_CONFIG_FILE, "r") as f:
                file_config = yaml.safe_load(f) or {}

            cls._config = cls._apply_env(cls._deep_merge(defaults, file_config))
            cls._last_load = now
            logger.info(f"Loaded resource config from {RESOURCE_CONFIG_FILE}")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error loading resource config: {e}")
            cls._config = cls._apply_env(defaults)

        cls._typed_config = ResourceSettings.model_validate(cls._config)
        return cls._config

    @classmethod
    def _apply_env(cls, config: dict) -> dict:
        """Environment variables win over file values."""
        overrides = {
            "base_url": get_env("broker_url"),
            "api_key": get_env("api_key", prefixed_only=True),
        }
        broker = dict(config.get("broker", {}))
        for key, value in overrides.items():
            if value:
                broker[key] = value
        level = get_env("log_level")
        result = dict(config, broker=broker)
        if level:
            result["logging"] = dict(config.get("logging", {}), level=level)
        return result

    @classmethod
    def _deep_merge(cls, base: dict, override: dict) -> dict:
        """Deep merge two dictionaries."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = cls._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    @classmethod
    def get(cls, *keys: str, default: object = None) -> object:
        """Get a nested config value using multiple keys."""
        config = cls.load()
        for key in keys:
            if isinstance(config, dict) and key in config:
                config = config[key]
            else:
                return default
        return config

    @classmethod
    def settings(cls) -> ResourceSettings:
        """Get typed configuration as a ResourceSettings instance."""
        if cls._typed_config is None:
            cls.load()
        assert cls._typed_config is not None
        return cls._typed_config
