"""
Presenter for the category list.

Reconciles fetch results, reachability changes, search text and the
loading placeholder into one render-ready CategoryListVM. All public
methods must run on the presenter's owning context; callbacks from the
data source and reachability monitor are routed through ``dispatch``
before they touch state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ...exceptions import FetchFailedError, IndexOutOfRangeError
from ...models.category import Category
from ...services.category_service import CategoryDataSource, CategoryFetchResult
from ...services.reachability import ReachabilityMonitor
from .search_filter import filter_categories

logger = logging.getLogger(__name__)

Dispatch = Callable[[Callable[[], None]], None]


class LoadState(Enum):
    """Where the category list is in its fetch lifecycle."""

    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    OFFLINE = "offline"
    ERROR = "error"


@dataclass
class CategoryListVM:
    """Complete category list state for the UI."""

    items: tuple[Category, ...] = ()
    total_count: int = 0
    query: str = ""
    search_active: bool = False
    load_state: LoadState = LoadState.IDLE
    is_placeholder_visible: bool = False
    error_message: str = ""
    status_text: str = ""

    @property
    def is_loading(self) -> bool:
        return self.load_state is LoadState.LOADING

    @property
    def is_offline(self) -> bool:
        return self.load_state is LoadState.OFFLINE


def _call_now(fn: Callable[[], None]) -> None:
    fn()


class CategoryListPresenter:
    """
    Single source of truth for what the category list displays.

    State machine:
        IDLE --activate (reachable)--> LOADING --success--> LOADED
        LOADING --failure--> ERROR
        any --reachability lost--> OFFLINE
        OFFLINE --activate (reachable)--> LOADING

    The placeholder is visible only while the collection is empty and the
    state is IDLE or LOADING, so refreshing a populated list never blanks it.
    """

    def __init__(
        self,
        data_source: CategoryDataSource,
        reachability: ReachabilityMonitor,
        *,
        on_state_update: Callable[[CategoryListVM], None] | None = None,
        on_error: Callable[[FetchFailedError], None] | None = None,
        dispatch: Dispatch | None = None,
    ):
        self._data_source = data_source
        self._reachability = reachability
        self.on_state_update = on_state_update
        self.on_error = on_error
        self._dispatch = dispatch or _call_now

        self._categories: tuple[Category, ...] = ()
        self._displayed: tuple[Category, ...] = ()
        self._query: str = ""
        self._search_active: bool = False
        self._load_state: LoadState = LoadState.IDLE
        self._error: FetchFailedError | None = None
        self._fetch_in_flight: bool = False

        self._unsubscribe: Callable[[], None] | None = reachability.subscribe(
            self._on_reachability_event
        )

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------

    @property
    def load_state(self) -> LoadState:
        return self._load_state

    @property
    def categories(self) -> tuple[Category, ...]:
        """The full, unfiltered collection from the last successful fetch."""
        return self._categories

    @property
    def query(self) -> str:
        return self._query

    @property
    def search_active(self) -> bool:
        return self._search_active

    @property
    def error(self) -> FetchFailedError | None:
        """The failure behind the ERROR state, if any."""
        return self._error

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_in_flight

    @property
    def is_querying(self) -> bool:
        return self._search_active or bool(self._query)

    @property
    def is_placeholder_visible(self) -> bool:
        return not self._categories and self._load_state in (
            LoadState.IDLE,
            LoadState.LOADING,
        )

    @property
    def state(self) -> CategoryListVM:
        """Build the current view model."""
        return CategoryListVM(
            items=self._displayed,
            total_count=len(self._categories),
            query=self._query,
            search_active=self._search_active,
            load_state=self._load_state,
            is_placeholder_visible=self.is_placeholder_visible,
            error_message=self._error.message if self._error else "",
            status_text=self._status_text(),
        )

    def _status_text(self) -> str:
        if self._load_state is LoadState.OFFLINE:
            return "Offline - check your connection and press r to retry"
        if self._load_state is LoadState.ERROR and self._error is not None:
            return f"Error: {self._error.message}"
        if self._load_state in (LoadState.IDLE, LoadState.LOADING) and not self._categories:
            return "Loading categories..."

        total = len(self._categories)
        if self.is_querying and self._query:
            text = f"{len(self._displayed)}/{total} categories matching '{self._query}'"
        else:
            text = f"{total} categories"
        if self._load_state is LoadState.LOADING:
            text += " (refreshing)"
        return text

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def activate(self) -> None:
        """Check reachability and fetch, or go offline.

        Safe to call repeatedly: while a fetch is in flight no second
        fetch is issued.
        """
        if self._load_state is LoadState.LOADING and self._fetch_in_flight:
            logger.debug("activate() ignored: fetch already in flight")
            return

        if not self._reachability.is_reachable():
            logger.info("activate(): network unreachable")
            self._go_offline()
            return

        self._load_state = LoadState.LOADING
        self._error = None
        self._publish()

        if self._fetch_in_flight:
            logger.info("activate(): waiting on earlier fetch")
            return

        logger.info("Fetching categories")
        self._fetch_in_flight = True
        try:
            self._data_source.fetch_categories(self._on_fetch_event)
        except Exception as e:
            if not self._fetch_in_flight:
                logger.exception("Data source raised after reporting its result; ignored")
                return
            logger.exception("Data source failed to start a fetch")
            error = e if isinstance(e, FetchFailedError) else FetchFailedError(str(e))
            self.on_fetch_completed(CategoryFetchResult.failure(error))

    def close(self) -> None:
        """Drop the reachability subscription."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # ------------------------------------------------------------------
    # Collaborator events
    # ------------------------------------------------------------------

    def _on_fetch_event(self, result: CategoryFetchResult) -> None:
        self._dispatch(lambda: self.on_fetch_completed(result))

    def _on_reachability_event(self, is_reachable: bool) -> None:
        self._dispatch(lambda: self.on_reachability_changed(is_reachable))

    def on_fetch_completed(self, result: CategoryFetchResult) -> None:
        """Apply a fetch outcome.

        Success replaces the collection wholesale. Failure keeps the
        previous collection. While OFFLINE, a success is stored but the
        state stays OFFLINE until the next activate().
        """
        self._fetch_in_flight = False
        offline = self._load_state is LoadState.OFFLINE

        if result.categories is not None:
            self._categories = result.categories
            self._refilter()
            if offline:
                logger.info("Stored %d categories while offline", len(self._categories))
            else:
                self._load_state = LoadState.LOADED
                self._error = None
                logger.info("Loaded %d categories", len(self._categories))
            self._publish()
            return

        error = result.error or FetchFailedError()
        if offline:
            logger.warning("Fetch failed while offline: %s", error)
            return

        logger.warning("Fetch failed: %s", error)
        self._load_state = LoadState.ERROR
        self._error = error
        self._publish()
        if self.on_error:
            self.on_error(error)

    def on_reachability_changed(self, is_reachable: bool) -> None:
        """Go OFFLINE when the network is lost; regaining it waits for activate()."""
        if is_reachable:
            logger.info("Network reachable again; waiting for activate()")
            return
        logger.info("Network lost while %s", self._load_state.value)
        self._go_offline()

    def _go_offline(self) -> None:
        self._load_state = LoadState.OFFLINE
        self._publish()

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def begin_search(self) -> None:
        self._search_active = True
        self._refilter()
        self._publish()

    def on_query_changed(self, text: str) -> None:
        """Update the query and recompute the displayed categories."""
        self._query = text or ""
        self._refilter()
        self._publish()

    def dismiss_search(self) -> None:
        """Leave search mode and clear the query."""
        self._search_active = False
        self._query = ""
        self._refilter()
        self._publish()

    def _refilter(self) -> None:
        if self.is_querying:
            self._displayed = filter_categories(self._categories, self._query)
        else:
            self._displayed = self._categories

    # ------------------------------------------------------------------
    # Renderer accessors
    # ------------------------------------------------------------------

    def item_count(self) -> int:
        return len(self._displayed)

    def item(self, index: int) -> Category:
        """Category at ``index`` in the displayed set.

        Raises:
            IndexOutOfRangeError: If the index is outside the displayed set
        """
        count = len(self._displayed)
        if not 0 <= index < count:
            raise IndexOutOfRangeError(index, count)
        return self._displayed[index]

    def selected(self, index: int) -> Category:
        """Resolve a selection against the set currently displayed."""
        category = self.item(index)
        logger.info("Selected category %s", category.key)
        return category

    def _publish(self) -> None:
        if self.on_state_update:
            self.on_state_update(self.state)
