"""
Error display for bookshelf CLI commands.

BookshelfError instances are logged and shown as a rich panel; anything
else is logged with its traceback and reported as unexpected. Both end
the command with a non-zero exit code.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .exceptions import (
    BookshelfError,
    ConfigurationError,
    FetchFailedError,
    NetworkUnreachableError,
)

console = Console(stderr=True)
logger = logging.getLogger("bookshelf")

F = TypeVar("F", bound=Callable[..., Any])

_SUGGESTIONS = {
    NetworkUnreachableError: "Check your connection and try again.",
    ConfigurationError: "Run 'bookshelf configure --api-key KEY' or set BOOKSHELF_API_KEY.",
    FetchFailedError: "The data source may be busy; try again in a moment.",
}


def _suggestion_for(error: BookshelfError) -> str:
    for error_type, suggestion in _SUGGESTIONS.items():
        if isinstance(error, error_type):
            return suggestion
    return ""


def display_error(error: BookshelfError, show_details: bool = False) -> None:
    """Show a BookshelfError to the user as a panel on stderr."""
    message = Text()
    message.append(error.message, style="bold red")

    if show_details and error.context:
        details = "\n".join(f"• {k}: {v}" for k, v in error.context.items())
        message.append(f"\n\nDetails:\n{details}", style="dim red")

    suggestion = _suggestion_for(error)
    if suggestion:
        message.append(f"\n\nSuggestion: {suggestion}", style="cyan")

    title = type(error).__name__.replace("Error", " Error").strip()
    console.print(
        Panel(
            message,
            title=f"[bold]{title}[/bold]",
            title_align="left",
            border_style="red",
            padding=(0, 1),
        )
    )


def handle_errors(operation: str, show_details: bool = False) -> Callable[[F], F]:
    """Decorator for typer commands: report failures and exit with code 1."""

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return func(*args, **kwargs)
            except typer.Exit:
                raise
            except BookshelfError as e:
                logger.error("%s failed: %s", operation, e)
                display_error(e, show_details)
                raise typer.Exit(1) from e
            except Exception as e:
                logger.error("Unexpected error during %s", operation, exc_info=True)
                display_error(
                    BookshelfError(f"An unexpected error occurred during {operation}", error=str(e)),
                    show_details=True,
                )
                raise typer.Exit(1) from e

        return wrapper  # type: ignore[return-value]

    return decorator
