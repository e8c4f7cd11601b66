# Path: plugin_downloader/core/config_loader.py
"""
Plugin Downloader Configuration Loader

Centralized configuration management for the plugin downloader.
Loads environment variables once, with type conversion and defaults.

Architecture:
- Environment read happens once (process start or test setup)
- Optional .env file via python-dotenv
- Type-safe access with sensible defaults
- Explicit overrides for embedding and tests
"""

import os
from typing import Any, Optional
from pathlib import Path
from dotenv import load_dotenv

from plugin_downloader.constants import (
    ENV_API_URL,
    ENV_GITHUB_URL,
    ENV_RETRY_ATTEMPTS,
    ENV_RETRY_DELAY,
    ENV_CHUNK_SIZE,
    ENV_REQUEST_TIMEOUT,
    ENV_CONNECT_TIMEOUT,
    ENV_SHOW_PROGRESS,
    ENV_DOWNLOAD_DIR,
    ENV_KEEP_ARCHIVE,
    ENV_LOG_LEVEL,
    ENV_LOG_CONSOLE,
    ENV_LOG_DIR,
    DEFAULT_API_BASE_URL,
    DEFAULT_GITHUB_BASE_URL,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_TIMEOUT,
    DEFAULT_CONNECT_TIMEOUT,
    DEFAULT_DOWNLOAD_DIR,
    RETRY_ATTEMPTS,
    RETRY_WAIT_TIME,
)


class ConfigLoader:
    """
    Configuration loader for the plugin downloader.

    Reads environment variables (and an optional .env file) when
    constructed. Components receive the loader explicitly instead of
    reading the environment at call sites.

    Example:
        config = ConfigLoader()
        base_url = config.get('api_base_url')

        # Tests
        config = ConfigLoader(overrides={'retry_delay': 0})
    """

    def __init__(
        self,
        env_file: Optional[Path] = None,
        overrides: Optional[dict[str, Any]] = None
    ):
        """
        Initialize configuration loader.

        Args:
            env_file: Optional path to a .env file to load first
            overrides: Optional values that replace loaded configuration
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(dotenv_path=env_file, interpolate=True)

        self._config = self._load_configuration()

        if overrides:
            self._config.update(overrides)

    def _load_configuration(self) -> dict[str, Any]:
        """
        Load all configuration from environment.

        Returns:
            Dictionary of configuration values
        """
        config = {
            # ================================================================
            # REMOTE ENDPOINTS
            # ================================================================
            'api_base_url': self._get_env(ENV_API_URL, DEFAULT_API_BASE_URL),
            'github_base_url': self._get_env(ENV_GITHUB_URL, DEFAULT_GITHUB_BASE_URL),

            # ================================================================
            # DOWNLOAD CONFIGURATION
            # ================================================================
            'retry_attempts': self._get_int(ENV_RETRY_ATTEMPTS, RETRY_ATTEMPTS),
            'retry_delay': self._get_float(ENV_RETRY_DELAY, RETRY_WAIT_TIME),
            'chunk_size': self._get_int(ENV_CHUNK_SIZE, DEFAULT_CHUNK_SIZE),
            'request_timeout': self._get_int(ENV_REQUEST_TIMEOUT, DEFAULT_TIMEOUT),
            'connect_timeout': self._get_int(ENV_CONNECT_TIMEOUT, DEFAULT_CONNECT_TIMEOUT),
            'show_progress': self._get_bool(ENV_SHOW_PROGRESS, True),
            'download_dir': self._get_path(ENV_DOWNLOAD_DIR) or Path(DEFAULT_DOWNLOAD_DIR),
            'keep_archive': self._get_bool(ENV_KEEP_ARCHIVE, False),

            # ================================================================
            # LOGGING CONFIGURATION
            # ================================================================
            'log_level': self._get_env(ENV_LOG_LEVEL, 'INFO'),
            'log_console': self._get_bool(ENV_LOG_CONSOLE, True),
            'log_dir': self._get_path(ENV_LOG_DIR),
        }

        return config

    def _get_env(self, key: str, default: Optional[str] = None, required: bool = False) -> Optional[str]:
        """
        Get string environment variable.

        Args:
            key: Environment variable name
            default: Default value if not found
            required: If True, raises ValueError when missing

        Returns:
            Environment variable value or default

        Raises:
            ValueError: If required and not found
        """
        value = os.getenv(key)

        if value is None or not value.strip():
            if required:
                raise ValueError(f"Required environment variable not set: {key}")
            return default

        return value.strip()

    def _get_bool(self, key: str, default: bool) -> bool:
        """Get boolean environment variable."""
        value = os.getenv(key)
        if value is None:
            return default

        return value.strip().lower() in ('true', '1', 'yes', 'on')

    def _get_int(self, key: str, default: int) -> int:
        """Get integer environment variable, falling back on invalid input."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return int(value.strip())
        except ValueError:
            return default

    def _get_float(self, key: str, default: float) -> float:
        """Get float environment variable, falling back on invalid input."""
        value = os.getenv(key)
        if value is None:
            return default

        try:
            return float(value.strip())
        except ValueError:
            return default

    def _get_path(self, key: str) -> Optional[Path]:
        """Get path environment variable or None."""
        value = os.getenv(key)
        if value is None or not value.strip():
            return None

        return Path(value.strip())

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if not found

        Returns:
            Configuration value or default
        """
        return self._config.get(key, default)

    def __getitem__(self, key: str) -> Any:
        """Dictionary-style access to configuration."""
        return self._config[key]

    def __contains__(self, key: str) -> bool:
        """Check if configuration key exists."""
        return key in self._config

    def items(self):
        """Get all configuration key-value pairs."""
        return self._config.items()


_default_config: Optional[ConfigLoader] = None


def get_config() -> ConfigLoader:
    """
    Get the process-wide configuration.

    The environment is read on the first call only.

    Returns:
        Shared ConfigLoader instance
    """
    global _default_config

    if _default_config is None:
        _default_config = ConfigLoader(env_file=Path.cwd() / '.env')

    return _default_config


def api_base_url(config: Optional[ConfigLoader] = None) -> str:
    """Registry base URL, honouring the LOKI_API_URL override."""
    config = config if config else get_config()
    return config.get('api_base_url', DEFAULT_API_BASE_URL)


__all__ = ['ConfigLoader', 'get_config', 'api_base_url']
