"""
Category listing commands for bookshelf
"""

import json
import queue
import time
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.table import Table

from ..config.settings import Settings, load_settings
from ..error_handling import handle_errors
from ..exceptions import FetchFailedError, NetworkUnreachableError
from ..services.category_service import CategoryDataSource, NYTCategoryService
from ..services.reachability import ReachabilityMonitor, SocketReachabilityMonitor
from ..ui.categories.category_presenter import CategoryListPresenter, LoadState
from ..ui.category_browser import build_reachability_monitor

console = Console()


def fetch_once(
    data_source: CategoryDataSource,
    reachability: ReachabilityMonitor,
    timeout: float,
    query: str = "",
) -> CategoryListPresenter:
    """Run one activate() cycle to completion on the calling thread.

    Worker-thread callbacks are queued and applied here, so the presenter
    is only ever touched by this thread.

    Raises:
        NetworkUnreachableError: If the network is unreachable
        FetchFailedError: If the fetch failed or did not finish in time
    """
    inbox: "queue.Queue[Callable[[], None]]" = queue.Queue()
    presenter = CategoryListPresenter(data_source, reachability, dispatch=inbox.put)
    try:
        presenter.activate()
        deadline = time.monotonic() + timeout
        while presenter.fetch_in_flight:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise FetchFailedError("Timed out waiting for categories", timeout=timeout)
            try:
                inbox.get(timeout=remaining)()
            except queue.Empty:
                continue

        if presenter.load_state is LoadState.OFFLINE:
            raise NetworkUnreachableError()
        if presenter.load_state is LoadState.ERROR and presenter.error is not None:
            raise presenter.error

        if query:
            presenter.on_query_changed(query)
        return presenter
    finally:
        presenter.close()


def _build_sources(settings: Settings) -> tuple[NYTCategoryService, SocketReachabilityMonitor]:
    return NYTCategoryService(settings), build_reachability_monitor(settings)


@handle_errors("listing categories")
def categories(
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Only show matching categories"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
):
    """List bestseller categories"""
    if format not in ("table", "json"):
        console.print(f"[red]Unknown format: {format}[/red]")
        raise typer.Exit(2)

    settings = load_settings()
    data_source, monitor = _build_sources(settings)
    # Allow time for the probe plus the request itself
    timeout = settings.request_timeout + settings.reachability_timeout + 1.0
    presenter = fetch_once(data_source, monitor, timeout, query=search or "")

    items = [presenter.item(i) for i in range(presenter.item_count())]

    if format == "json":
        typer.echo(
            json.dumps(
                [
                    {"key": c.key, "display_name": c.display_name, "list_name": c.list_name}
                    for c in items
                ],
                indent=2,
            )
        )
        return

    if not items:
        console.print("[yellow]No categories found[/yellow]")
        return

    title = "Book Categories"
    if search:
        title += f" - matching '{search}'"
    table = Table(title=title)
    table.add_column("#", justify="right", style="cyan", no_wrap=True)
    table.add_column("Category", style="magenta")
    table.add_column("Key", style="green")
    table.add_column("Updated", style="yellow")
    for index, category in enumerate(items):
        table.add_row(str(index), category.display_name, category.key, category.updated or "-")
    console.print(table)
    console.print(f"[dim]{presenter.state.status_text}[/dim]")
