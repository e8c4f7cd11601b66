# Path: plugin_downloader/engine/extraction/constants.py
"""
Extraction Module Constants

Archive entry naming conventions for plugin archives.
NO HARDCODED VALUES in extraction handlers - all conventions here.
"""

# ============================================================================
# ARCHIVE READ MODE
# ============================================================================

ZIP_READ_MODE = 'r'

# Streaming copy buffer for the extracted binary
COPY_BUFFER_SIZE = 1024 * 1024

# ============================================================================
# HUB ARCHIVES
# ============================================================================

HUB_ENTRY_TEMPLATE = 'plugin-{name}-{version}-{os}-{arch}'

# ============================================================================
# GITHUB ARCHIVES
# ============================================================================

# URL prefix -> entry path, checked in order. First match wins.
# Monorepo prefixes come first: they are the more specific ones.
GITHUB_ARCHIVE_LAYOUTS = [
    ('{base}/pixis/loki/releases/download/plugins-plugin', 'plugins/plugin/{name}'),
    ('{base}/pixis/loki/releases/download/plugins-source', 'plugins/source/{name}'),
    ('{base}/pixis/loki/releases/download/plugins-destination', 'plugins/destination/{name}'),
    ('{base}/{org}/loki-plugin', 'loki-plugin-{name}'),
    ('{base}/{org}/loki-source', 'loki-source-{name}'),
    ('{base}/{org}/loki-destination', 'loki-destination-{name}'),
]
