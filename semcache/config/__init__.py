"""
semcache — Configuration Module

Provides typed configuration loading and validation.
"""

from .loader import get_config, load_config, reload_config
from .schemas import (
    DEFAULT_MIN_PROXIMITY,
    AppConfig,
    Environment,
    IndexBackend,
    IndexConfig,
    LogLevel,
    SemanticCacheConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "get_config",
    "reload_config",
    # Main config
    "AppConfig",
    # Enums
    "Environment",
    "IndexBackend",
    "LogLevel",
    # Config sections
    "IndexConfig",
    "SemanticCacheConfig",
    "DEFAULT_MIN_PROXIMITY",
]
