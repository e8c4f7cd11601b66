# Path: plugin_downloader/constants.py
"""
Plugin Downloader Constants

Module-wide constants for plugin download operations.
Engine-specific constants (URL conventions, archive layouts) live in
engine/constants.py and engine/extraction/constants.py.

No hardcoded environment access - values come from config_loader.
"""

# ============================================================================
# DOWNLOAD DEFAULTS
# ============================================================================
DEFAULT_DOWNLOAD_DIR: str = '.loki'
RETRY_ATTEMPTS: int = 5  # Total attempts, first one included
RETRY_WAIT_TIME: float = 1.0  # Fixed delay between attempts (seconds)
DEFAULT_CHUNK_SIZE: int = 32768  # 32KB chunks for streaming
DEFAULT_TIMEOUT: int = 300  # 5 minutes for large plugin archives
DEFAULT_CONNECT_TIMEOUT: int = 30

# ============================================================================
# REMOTE ENDPOINTS
# ============================================================================
DEFAULT_API_BASE_URL: str = 'https://api.lokipixis.ai'
DEFAULT_GITHUB_BASE_URL: str = 'https://github.com'

# ============================================================================
# HTTP STATUS CODES
# ============================================================================
HTTP_OK: int = 200
HTTP_UNAUTHORIZED: int = 401
HTTP_NOT_FOUND: int = 404
HTTP_TOO_MANY_REQUESTS: int = 429

# ============================================================================
# LOCAL FILESYSTEM
# ============================================================================
ARCHIVE_EXTENSION: str = '.zip'
DIRECTORY_MODE: int = 0o755
BINARY_MODE: int = 0o744

# ============================================================================
# ENVIRONMENT VARIABLES
# ============================================================================
ENV_API_URL: str = 'LOKI_API_URL'
ENV_GITHUB_URL: str = 'LOKI_GITHUB_URL'
ENV_RETRY_ATTEMPTS: str = 'LOKI_DOWNLOAD_RETRY_ATTEMPTS'
ENV_RETRY_DELAY: str = 'LOKI_DOWNLOAD_RETRY_DELAY'
ENV_CHUNK_SIZE: str = 'LOKI_DOWNLOAD_CHUNK_SIZE'
ENV_REQUEST_TIMEOUT: str = 'LOKI_REQUEST_TIMEOUT'
ENV_CONNECT_TIMEOUT: str = 'LOKI_CONNECT_TIMEOUT'
ENV_SHOW_PROGRESS: str = 'LOKI_SHOW_PROGRESS'
ENV_DOWNLOAD_DIR: str = 'LOKI_DOWNLOAD_DIR'
ENV_KEEP_ARCHIVE: str = 'LOKI_KEEP_ARCHIVE'
ENV_LOG_LEVEL: str = 'LOKI_LOG_LEVEL'
ENV_LOG_CONSOLE: str = 'LOKI_LOG_CONSOLE'
ENV_LOG_DIR: str = 'LOKI_LOG_DIR'

# ============================================================================
# IPO LOGGING PREFIXES
# ============================================================================
LOG_INPUT: str = '[INPUT]'
LOG_PROCESS: str = '[PROCESS]'
LOG_OUTPUT: str = '[OUTPUT]'

# ============================================================================
# LOGGING COMPONENTS
# ============================================================================
LOGGER_ROOT: str = 'plugin_downloader'
LOGGER_CORE: str = 'plugin_downloader.core'
LOGGER_ENGINE: str = 'plugin_downloader.engine'
LOGGER_EXTRACTION: str = 'plugin_downloader.extraction'
LOGGER_HUB: str = 'plugin_downloader.hub'
LOGGER_CLI: str = 'plugin_downloader.cli'

# ============================================================================
# LOG FORMAT
# ============================================================================
LOG_FORMAT: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT: str = '%Y-%m-%d %H:%M:%S'
