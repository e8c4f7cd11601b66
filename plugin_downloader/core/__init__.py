# Path: plugin_downloader/core/__init__.py
"""
Plugin Downloader Core Module

Core utilities: configuration and logging.
"""

from .config_loader import ConfigLoader, get_config, api_base_url
from .logger import get_logger, configure_logging

__all__ = [
    'ConfigLoader',
    'get_config',
    'api_base_url',
    'get_logger',
    'configure_logging',
]
