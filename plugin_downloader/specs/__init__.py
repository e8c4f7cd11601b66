# Path: plugin_downloader/specs/__init__.py
"""
Plugin Specs

Shared enumerations describing plugins and their sync behaviour.
"""

from plugin_downloader.specs.plugin_kind import PluginKind
from plugin_downloader.specs.pk_mode import PKMode

__all__ = ['PluginKind', 'PKMode']
