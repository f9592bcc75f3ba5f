"""
Configuration module for the creation rules engine.

Usage:
    from mythos_creation.config import get_config

    config = get_config()
    logger.info("Configuration loaded", dice_seed=config.engine.dice_seed)
"""

import sys
import threading
from functools import lru_cache
from os import getenv

from .models import AppConfig, EngineConfig, LoggingConfig

__all__ = ["get_config", "reset_config", "AppConfig", "EngineConfig", "LoggingConfig"]

_config_lock = threading.Lock()


def _is_test_mode() -> bool:
    """
    Detect if running in test environment.

    Returns:
        bool: True if running under pytest, False otherwise
    """
    if "pytest" in sys.modules:
        return True
    return bool(getenv("PYTEST_CURRENT_TEST"))


@lru_cache(maxsize=1)
def _get_config_cached() -> AppConfig:
    """Production config loader with caching."""
    with _config_lock:
        return AppConfig()


def get_config() -> AppConfig:
    """
    Get application configuration (singleton in production, fresh in tests).

    Configuration is loaded from environment variables and .env file.

    Returns:
        AppConfig: The application configuration

    Raises:
        ValidationError: If configuration is invalid
    """
    if _is_test_mode():
        return AppConfig()
    return _get_config_cached()


def reset_config() -> None:
    """
    Reset the configuration cache.

    In test mode get_config() already returns fresh instances, so this only
    matters for long-lived processes that change their environment.
    """
    with _config_lock:
        _get_config_cached.cache_clear()
