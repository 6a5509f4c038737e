"""
Configuration command for bookshelf
"""

from typing import Optional

import typer
from rich.console import Console

from ..config.settings import get_config_path, load_config_file, load_settings, save_config_file
from ..error_handling import handle_errors

console = Console()


@handle_errors("updating configuration")
def configure(
    api_key: Optional[str] = typer.Option(None, "--api-key", help="NYT Books API key"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Books API base URL"),
    show: bool = typer.Option(False, "--show", help="Print the resolved settings"),
):
    """Store the API key and other settings in the config file"""
    updates = {k: v for k, v in {"api_key": api_key, "api_url": api_url}.items() if v}
    if updates:
        config = load_config_file()
        config.update(updates)
        path = save_config_file(config)
        console.print(f"[green]Saved {', '.join(sorted(updates))} to {path}[/green]")

    if show or not updates:
        settings = load_settings()
        console.print(f"Config file: {get_config_path()}")
        console.print(f"API URL: {settings.api_url}")
        console.print(f"API key: {'set' if settings.has_api_key else '[red]not set[/red]'}")
        console.print(
            f"Reachability probe: {settings.reachability_host}:{settings.reachability_port}"
        )
