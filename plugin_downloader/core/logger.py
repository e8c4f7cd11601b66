# Path: plugin_downloader/core/logger.py
"""
Plugin Downloader Logger

Centralized logging configuration for the plugin downloader.

Architecture:
- Component-based logging (core, engine, extraction, hub, cli)
- File and console output
- Configurable log levels
- IPO (Input-Process-Output) structured logging
"""

import logging
from typing import Optional

from plugin_downloader.core.config_loader import ConfigLoader, get_config
from plugin_downloader.constants import (
    LOG_FORMAT,
    LOG_DATE_FORMAT,
    LOGGER_ROOT,
    LOGGER_CORE,
    LOGGER_ENGINE,
    LOGGER_EXTRACTION,
    LOGGER_HUB,
    LOGGER_CLI,
)


COMPONENT_LOGGERS: dict[str, str] = {
    'core': LOGGER_CORE,
    'engine': LOGGER_ENGINE,
    'extraction': LOGGER_EXTRACTION,
    'hub': LOGGER_HUB,
    'cli': LOGGER_CLI,
}


class DownloaderLogger:
    """
    Centralized logger for the plugin downloader.

    Provides component-specific loggers with unified configuration.

    Example:
        logger = get_logger(__name__, 'engine')
        logger.info("[INPUT] Resolving plugin loki/aws@v22.18.0")
        logger.info("[PROCESS] Downloading https://github.com/...")
        logger.info("[OUTPUT] Plugin written to .loki/plugins/aws")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize downloader logger.

        Args:
            config: Optional ConfigLoader instance (process config if None)
        """
        self._config = config
        self._configured = False

    @property
    def config(self) -> ConfigLoader:
        if self._config is None:
            self._config = get_config()
        return self._config

    def configure(self, console_handler: Optional[logging.Handler] = None) -> None:
        """
        Configure logging system for the plugin downloader.

        Args:
            console_handler: Optional replacement for the plain console handler
        """
        if self._configured and console_handler is None:
            return

        log_dir = self.config.get('log_dir')
        log_level = getattr(logging, str(self.config.get('log_level', 'INFO')).upper(), logging.INFO)
        console_output = self.config.get('log_console', True)

        logger = logging.getLogger(LOGGER_ROOT)
        logger.setLevel(log_level)
        logger.handlers.clear()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

        if log_dir:
            log_dir.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_dir / 'downloader_activity.log')
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

            # Download-specific log file
            download_handler = logging.FileHandler(log_dir / 'downloads.log')
            download_handler.setLevel(logging.DEBUG)
            download_handler.setFormatter(formatter)
            engine_logger = logging.getLogger(LOGGER_ENGINE)
            engine_logger.handlers.clear()
            engine_logger.addHandler(download_handler)

            # Error-only log file
            error_handler = logging.FileHandler(log_dir / 'errors.log')
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(formatter)
            logger.addHandler(error_handler)

        if console_handler is not None:
            console_handler.setLevel(log_level)
            logger.addHandler(console_handler)
        elif console_output:
            stream_handler = logging.StreamHandler()
            stream_handler.setLevel(log_level)
            stream_handler.setFormatter(formatter)
            logger.addHandler(stream_handler)

        self._configured = True

    def get_logger(self, name: str, component: str = 'core') -> logging.Logger:
        """
        Get logger for specific component.

        Configuration is deferred until configure() is called, so
        importing the package never touches handlers.

        Args:
            name: Module name (typically __name__)
            component: Component type ('core', 'engine', 'extraction', 'hub', 'cli')

        Returns:
            Logger instance
        """
        prefix = COMPONENT_LOGGERS.get(component, LOGGER_ROOT)
        return logging.getLogger(f"{prefix}.{name}")


# Global logger instance
_downloader_logger = DownloaderLogger()


def get_logger(name: str, component: str = 'core') -> logging.Logger:
    """
    Get logger for a plugin downloader component.

    Args:
        name: Module name (typically __name__)
        component: Component type ('core', 'engine', 'extraction', 'hub', 'cli')

    Returns:
        Logger instance

    Example:
        from plugin_downloader.core.logger import get_logger

        logger = get_logger(__name__, 'engine')
        logger.info("[OUTPUT] Download completed successfully")
    """
    return _downloader_logger.get_logger(name, component)


def configure_logging(
    config: Optional[ConfigLoader] = None,
    console_handler: Optional[logging.Handler] = None
) -> None:
    """
    Configure plugin downloader logging.

    Call this once at process start.

    Args:
        config: Optional ConfigLoader instance
        console_handler: Optional console handler (the CLI passes a RichHandler)
    """
    global _downloader_logger

    if config:
        _downloader_logger = DownloaderLogger(config)

    _downloader_logger.configure(console_handler=console_handler)


__all__ = ['get_logger', 'configure_logging', 'DownloaderLogger']
