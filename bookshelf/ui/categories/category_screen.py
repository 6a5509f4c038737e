"""
Category Screen - browsable, searchable grid of bestseller list categories.

Renders the CategoryListPresenter's view model. Fetch and reachability
callbacks arrive on worker threads and are marshaled onto the app thread
with App.call_from_thread before the presenter sees them.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from rich.text import Text
from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.screen import Screen
from textual.timer import Timer
from textual.widgets import DataTable, Footer, Header, Input, Static

from ...config.constants import (
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    GRID_COLUMNS,
    PLACEHOLDER_ROW_COUNT,
)
from ...exceptions import FetchFailedError, IndexOutOfRangeError
from ...services.category_service import CategoryDataSource
from ...services.reachability import ReachabilityMonitor
from ..category_detail import CategoryDetailScreen
from ..modals import ErrorAlertScreen, OfflineScreen
from .category_presenter import CategoryListPresenter, CategoryListVM

logger = logging.getLogger(__name__)

_SKELETON_CELL = Text("░" * 24, style="dim")


class CategoryScreen(Screen):
    """Search bar, category grid and status line."""

    CSS = """
    #category-search {
        dock: top;
        margin: 0 1;
    }

    #category-grid {
        height: 1fr;
    }

    #category-grid.skeleton {
        opacity: 60%;
    }

    #category-status {
        height: 1;
        background: $primary;
        color: $text;
        padding: 0 1;
    }

    #category-status.loading {
        text-style: italic;
    }
    """

    BINDINGS = [
        Binding("slash", "focus_search", "Search"),
        Binding("escape", "dismiss_search", "Clear search", priority=True),
        Binding("r", "refresh", "Refresh"),
        Binding("q", "app.quit", "Quit"),
    ]

    def __init__(
        self,
        data_source: CategoryDataSource,
        reachability: ReachabilityMonitor,
        *,
        search_debounce: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS,
        name: str | None = None,
        id: str | None = None,
    ):
        super().__init__(name=name, id=id)
        self.search_debounce = search_debounce
        self.presenter = CategoryListPresenter(
            data_source,
            reachability,
            on_state_update=self._on_state_update,
            on_error=self._on_fetch_error,
            dispatch=self._dispatch,
        )
        self._owner_thread: int | None = None
        self._search_timer: Timer | None = None
        self._render_pending = False
        self._offline_shown = False

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical():
            yield Input(placeholder="Search book categories...", id="category-search")
            yield DataTable(id="category-grid", cursor_type="cell", show_header=False)
            yield Static("", id="category-status")
        yield Footer()

    def on_mount(self) -> None:
        self._owner_thread = threading.get_ident()
        self.title = "Book Categories"
        table = self.query_one("#category-grid", DataTable)
        for column in range(GRID_COLUMNS):
            table.add_column(f"col{column}", key=f"col{column}")
        table.focus()
        self.presenter.activate()

    def on_unmount(self) -> None:
        self.presenter.close()

    # ------------------------------------------------------------------
    # Marshaling
    # ------------------------------------------------------------------

    def _dispatch(self, fn: Callable[[], None]) -> None:
        """Run ``fn`` on the app thread."""
        if self._owner_thread is None or threading.get_ident() == self._owner_thread:
            fn()
            return
        try:
            self.app.call_from_thread(fn)
        except RuntimeError as e:
            # App already shut down; nothing is left to update.
            logger.warning("Dropped callback after shutdown: %s", e)

    # ------------------------------------------------------------------
    # Presenter callbacks
    # ------------------------------------------------------------------

    def _on_state_update(self, vm: CategoryListVM) -> None:
        # Coalesce bursts of updates into one redraw; the flush reads the
        # presenter's latest state.
        if self._render_pending:
            return
        self._render_pending = True
        self.call_after_refresh(self._flush_render)

    def _on_fetch_error(self, error: FetchFailedError) -> None:
        self.app.push_screen(ErrorAlertScreen("Unable to load categories", error.message))

    def _flush_render(self) -> None:
        self._render_pending = False
        self.render_state(self.presenter.state)

    def render_state(self, vm: CategoryListVM) -> None:
        """Paint the grid, status line and offline overlay from ``vm``."""
        table = self.query_one("#category-grid", DataTable)
        table.clear()
        if vm.is_placeholder_visible:
            table.add_class("skeleton")
            for _ in range(PLACEHOLDER_ROW_COUNT):
                table.add_row(*([_SKELETON_CELL] * GRID_COLUMNS))
        else:
            table.remove_class("skeleton")
            count = self.presenter.item_count()
            for start in range(0, count, GRID_COLUMNS):
                cells = [
                    self.presenter.item(i).display_name if i < count else ""
                    for i in range(start, start + GRID_COLUMNS)
                ]
                table.add_row(*cells)

        status = self.query_one("#category-status", Static)
        status.update(Text(vm.status_text))
        status.set_class(vm.is_loading, "loading")

        if vm.is_offline and not self._offline_shown:
            self._offline_shown = True
            self.app.push_screen(OfflineScreen(), self._on_offline_dismissed)

    def _on_offline_dismissed(self, retry: bool | None) -> None:
        self._offline_shown = False
        if retry:
            self.presenter.activate()
        else:
            self.app.exit()

    # ------------------------------------------------------------------
    # User intents
    # ------------------------------------------------------------------

    @on(Input.Changed, "#category-search")
    def on_search_changed(self, event: Input.Changed) -> None:
        query = event.value
        if self.search_debounce <= 0:
            self.presenter.on_query_changed(query)
            return
        # Atomic swap: only the latest keystroke's timer survives
        if self._search_timer is not None:
            self._search_timer.stop()
        self._search_timer = self.set_timer(
            self.search_debounce,
            lambda: self.presenter.on_query_changed(query),
        )

    @on(Input.Submitted, "#category-search")
    def on_search_submitted(self, event: Input.Submitted) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
            self._search_timer = None
        self.presenter.on_query_changed(event.value)
        self.query_one("#category-grid", DataTable).focus()

    @on(DataTable.CellSelected, "#category-grid")
    def on_cell_selected(self, event: DataTable.CellSelected) -> None:
        if self.presenter.is_placeholder_visible:
            return
        if self._render_pending:
            # The grid is about to change under the cursor; resync first.
            self._flush_render()
            return

        index = event.coordinate.row * GRID_COLUMNS + event.coordinate.column
        if index >= self.presenter.item_count() and event.coordinate.column > 0:
            return  # Blank trailing cell of an odd-sized set
        try:
            category = self.presenter.selected(index)
        except IndexOutOfRangeError:
            logger.error("Selection at %d read a stale grid; re-rendering", index, exc_info=True)
            self._flush_render()
            return
        self.app.push_screen(CategoryDetailScreen(category))

    def action_focus_search(self) -> None:
        self.presenter.begin_search()
        self.query_one("#category-search", Input).focus()

    def action_dismiss_search(self) -> None:
        if self._search_timer is not None:
            self._search_timer.stop()
            self._search_timer = None
        search = self.query_one("#category-search", Input)
        search.value = ""
        self.presenter.dismiss_search()
        self.query_one("#category-grid", DataTable).focus()

    def action_refresh(self) -> None:
        self.presenter.activate()
