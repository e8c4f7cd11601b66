# Path: plugin_downloader/__main__.py
"""
Plugin Downloader - Main Entry Point

Usage:
    python -m plugin_downloader github loki hackernews v1.1.4
"""

from plugin_downloader.cli.download_cli import run


if __name__ == '__main__':
    run()
