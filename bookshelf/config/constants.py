"""
Centralized constants for bookshelf.

All magic numbers and default configuration values live here so the
presenter, services and UI agree on them.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

BOOKSHELF_CONFIG_DIR = Path(
    os.environ.get("BOOKSHELF_CONFIG_DIR", str(Path.home() / ".config" / "bookshelf"))
)
CONFIG_FILE_NAME = "config.json"
LOG_FILE_NAME = "bookshelf.log"
TUI_LOG_FILE_NAME = "tui_debug.log"

# =============================================================================
# DATA SOURCE
# =============================================================================

DEFAULT_API_URL = "https://api.nytimes.com/svc/books/v3"
CATEGORY_LIST_PATH = "/lists/names.json"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0

# =============================================================================
# REACHABILITY
# =============================================================================

DEFAULT_REACHABILITY_HOST = "api.nytimes.com"
DEFAULT_REACHABILITY_PORT = 443
DEFAULT_REACHABILITY_INTERVAL_SECONDS = 5.0  # Polling interval between probes
DEFAULT_REACHABILITY_TIMEOUT_SECONDS = 3.0  # TCP connect timeout per probe

# =============================================================================
# UI
# =============================================================================

PLACEHOLDER_ROW_COUNT = 25  # Skeleton rows shown before the first load
GRID_COLUMNS = 2  # Categories per row
DEFAULT_SEARCH_DEBOUNCE_SECONDS = 0.15  # 0 applies every keystroke immediately

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

# Maps each environment variable to the settings field it overrides
# and the type it must parse as. Later entries win.
ENV_VAR_DEFINITIONS = {
    "NYT_API_KEY": {"field": "api_key", "type": str},
    "BOOKSHELF_API_KEY": {"field": "api_key", "type": str},  # Wins over NYT_API_KEY
    "BOOKSHELF_API_URL": {"field": "api_url", "type": str},
    "BOOKSHELF_TIMEOUT": {"field": "request_timeout", "type": float},
    "BOOKSHELF_REACHABILITY_HOST": {"field": "reachability_host", "type": str},
    "BOOKSHELF_REACHABILITY_PORT": {"field": "reachability_port", "type": int},
    "BOOKSHELF_SEARCH_DEBOUNCE": {"field": "search_debounce", "type": float},
}
