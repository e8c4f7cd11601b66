# Path: plugin_downloader/engine/extraction/__init__.py
"""
Extraction Module

Single-binary extraction from plugin archives.

Use PluginArchiveExtractor to copy the entry out.
Use hub_entry_name / github_entry_name to pick the entry.
"""

from plugin_downloader.engine.extraction.archive_handler import PluginArchiveExtractor
from plugin_downloader.engine.extraction.entry_names import (
    github_entry_name,
    hub_entry_name,
)

__all__ = [
    'PluginArchiveExtractor',
    'github_entry_name',
    'hub_entry_name',
]
