#!/usr/bin/env python3
"""
Main CLI entry point for bookshelf
"""

import typer

from bookshelf import __version__
from bookshelf.commands.browse import browse
from bookshelf.commands.categories import categories
from bookshelf.commands.configure import configure
from bookshelf.utils.logging_utils import setup_logging


def version():
    """Show bookshelf version"""
    typer.echo(f"bookshelf version {__version__}")


def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """
    bookshelf - browse bestseller list categories

    [bold]Examples:[/bold]

    Browse interactively:
        [cyan]bookshelf browse[/cyan]

    List categories matching "fiction":
        [cyan]bookshelf categories --search fiction[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)
    setup_logging(verbose=verbose, quiet=quiet)


def create_app() -> typer.Typer:
    """Create and configure the main CLI application"""
    app = typer.Typer(rich_markup_mode="rich", no_args_is_help=True)
    app.callback()(main)
    app.command()(browse)
    app.command()(categories)
    app.command()(configure)
    app.command()(version)
    return app


app = create_app()


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
