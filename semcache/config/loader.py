"""
semcache — Configuration Loader

Loads and validates configuration from environment variables and .env files.
Provides a singleton configuration instance for the process.
"""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import ConfigurationError
from .schemas import AppConfig

logger = logging.getLogger(__name__)

_config_instance: AppConfig | None = None


def _first_env(*names: str) -> str | None:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


def load_config(
    env_file: str | None = None,
    reload: bool = False,
) -> AppConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Path to .env file (default: .env in the working directory)
        reload: Force reload even if config already loaded

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigurationError: If configuration is invalid
    """
    global _config_instance

    if _config_instance is not None and not reload:
        return _config_instance

    if env_file:
        env_path = Path(env_file)
    else:
        env_path = Path.cwd() / ".env"

    if env_path.exists():
        logger.info(f"Loading environment from {env_path}")
        try:
            load_dotenv(env_path, override=True)
        except Exception as e:
            logger.error(
                f"Failed to load .env file from {env_path}: {e}",
                extra={"path": str(env_path), "error": str(e)},
                exc_info=True,
            )
            raise ConfigurationError(
                f"Failed to load environment file: {e}",
                details={"path": str(env_path), "error": str(e)},
            ) from e
    else:
        logger.debug("No .env file found, using environment variables only")

    # Auto-detect index backend: Upstash if a vector URL is set, else memory
    vector_url = _first_env("VECTOR_URL", "UPSTASH_VECTOR_REST_URL")
    vector_token = _first_env("VECTOR_TOKEN", "UPSTASH_VECTOR_REST_TOKEN")
    index_backend = "upstash" if vector_url else "memory"

    try:
        config_dict = {
            "environment": os.getenv("ENVIRONMENT", "development"),
            "log_level": os.getenv("LOG_LEVEL", "INFO").upper(),
            "index": {
                "backend": os.getenv("INDEX_BACKEND", index_backend).lower(),
                "url": vector_url,
                "token": vector_token,
                "embedding_dimensions": int(os.getenv("EMBEDDING_DIMENSIONS", "256")),
                "persist_directory": os.getenv("CHROMA_PERSIST_DIRECTORY") or None,
                "collection_name": os.getenv("CHROMA_COLLECTION", "semcache"),
            },
            "cache": {
                "min_proximity": float(os.getenv("MIN_PROXIMITY", "0.9")),
                "namespace": os.getenv("CACHE_NAMESPACE"),
            },
        }
    except ValueError as e:
        logger.error(f"Invalid numeric configuration value: {e}", exc_info=True)
        raise ConfigurationError(
            f"Invalid numeric configuration value: {e}",
            details={"error": str(e)},
        ) from e

    try:
        _config_instance = AppConfig(**config_dict)  # type: ignore[arg-type]
        logger.info(
            f"Configuration loaded successfully (environment: {_config_instance.environment})",
            extra={
                "environment": _config_instance.environment,
                "index_backend": _config_instance.index.backend,
            },
        )
        return _config_instance
    except ValidationError as e:
        logger.error(
            f"Configuration validation failed: {e}",
            extra={"validation_errors": e.errors(), "config_dict_keys": list(config_dict.keys())},
            exc_info=True,
        )
        raise ConfigurationError(
            "Configuration validation failed. Check your environment variables and configuration.",
            details={"validation_errors": e.errors()},
        ) from e


def get_config() -> AppConfig:
    """
    Get the current configuration instance, loading it on first access.

    Returns:
        Current AppConfig instance
    """
    if _config_instance is None:
        return load_config()

    return _config_instance


def reload_config(env_file: str | None = None) -> AppConfig:
    """
    Force reload configuration.

    Args:
        env_file: Optional path to .env file

    Returns:
        Reloaded AppConfig instance
    """
    return load_config(env_file=env_file, reload=True)
