# Path: plugin_downloader/cli/__init__.py
"""
Plugin Downloader CLI Module

Command-line driver for single plugin installs.
"""

from plugin_downloader.cli.download_cli import main, run

__all__ = ['main', 'run']
