# Path: plugin_downloader/engine/constants.py
"""
Plugin Downloader Engine Constants

Publishing conventions, registry endpoints and HTTP headers.
NO HARDCODED VALUES in engine modules - all conventions here.
"""

# ============================================================================
# GITHUB RELEASE CONVENTIONS
# ============================================================================

# Organization that owns the plugin monorepo
MONOREPO_OWNER = 'pixis'

# Per-plugin repository: <org>/loki-<kind>-<name>
PER_REPOSITORY_URL_TEMPLATE = (
    '{base}/{org}/loki-{kind}-{name}/releases/download/{version}/'
    'loki-{kind}-{name}_{os}_{arch}.zip'
)

# Monorepo: pixis/loki, one release tag per plugin version
MONOREPO_URL_TEMPLATE = (
    '{base}/pixis/loki/releases/download/plugins-{kind}-{name}-{version}/'
    '{name}_{os}_{arch}.zip'
)

# Probing order. 'owner' restricts a convention to one organization.
# Adding a convention is a data change only.
URL_CONVENTIONS = [
    {
        'name': 'per-repository',
        'template': PER_REPOSITORY_URL_TEMPLATE,
        'owner': None,
    },
    {
        'name': 'monorepo',
        'template': MONOREPO_URL_TEMPLATE,
        'owner': MONOREPO_OWNER,
    },
]

# ============================================================================
# HUB REGISTRY ENDPOINTS
# ============================================================================

HUB_ASSET_PATH = (
    '/plugins/{plugin_team}/{plugin_kind}/{plugin_name}'
    '/versions/{plugin_version}/assets/{target}'
)

HUB_TEAM_ASSET_PATH = (
    '/teams/{team_name}/plugins/{plugin_team}/{plugin_kind}/{plugin_name}'
    '/versions/{plugin_version}/assets/{target}'
)

# ============================================================================
# HTTP HEADERS
# ============================================================================

HEADER_USER_AGENT = 'User-Agent'
HEADER_ACCEPT = 'Accept'
HEADER_AUTHORIZATION = 'Authorization'

DEFAULT_USER_AGENT = 'loki-plugin-downloader/1.0'
ACCEPT_JSON = 'application/json'
ACCEPT_ANY = '*/*'

# Connection pool
MAX_CONCURRENT_CONNECTIONS = 10

# ============================================================================
# PROGRESS DISPLAY
# ============================================================================

PROGRESS_DESCRIPTION = 'Downloading'
PROGRESS_REFRESH_PER_SECOND = 15  # ~65ms throttle
