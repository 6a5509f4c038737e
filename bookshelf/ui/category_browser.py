"""
Category browser app.

Hosts the CategoryScreen and wires it to the configured data source and
reachability monitor.
"""

import logging

from textual.app import App

from ..config.settings import Settings
from ..services.category_service import CategoryDataSource, NYTCategoryService
from ..services.reachability import ReachabilityMonitor, SocketReachabilityMonitor
from .categories.category_screen import CategoryScreen

logger = logging.getLogger(__name__)


def build_reachability_monitor(settings: Settings) -> SocketReachabilityMonitor:
    return SocketReachabilityMonitor(
        settings.reachability_host,
        settings.reachability_port,
        interval=settings.reachability_interval,
        timeout=settings.reachability_timeout,
    )


class CategoryBrowserApp(App):
    """Terminal browser for bestseller list categories."""

    TITLE = "Book Categories"

    def __init__(
        self,
        settings: Settings,
        data_source: CategoryDataSource | None = None,
        reachability: ReachabilityMonitor | None = None,
    ):
        super().__init__()
        self.settings = settings
        self.data_source = data_source or NYTCategoryService(settings)
        self.reachability = reachability or build_reachability_monitor(settings)

    def on_mount(self) -> None:
        logger.info("Category browser starting")
        self.push_screen(
            CategoryScreen(
                self.data_source,
                self.reachability,
                search_debounce=self.settings.search_debounce,
                id="categories",
            )
        )
