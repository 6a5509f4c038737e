"""
Interactive category browser command
"""

import logging

from ..config.settings import load_settings
from ..error_handling import handle_errors
from ..ui.category_browser import CategoryBrowserApp, build_reachability_monitor
from ..utils.logging_utils import setup_tui_logging

logger = logging.getLogger(__name__)


@handle_errors("browsing categories")
def browse():
    """Browse and search bestseller categories in a terminal UI"""
    settings = load_settings()
    setup_tui_logging()

    monitor = build_reachability_monitor(settings)
    # First probe runs here so the screen never blocks on it
    monitor.check()
    monitor.start()
    try:
        CategoryBrowserApp(settings, reachability=monitor).run()
    finally:
        monitor.stop()
        logger.info("Category browser closed")
