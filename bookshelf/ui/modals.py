"""
Modal screens for the bookshelf TUI.
"""

import logging

from textual.app import ComposeResult
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label

logger = logging.getLogger(__name__)


class OfflineScreen(ModalScreen[bool]):
    """Shown over the list while the network is unreachable.

    Dismisses with True when the user asks to retry, False to quit.
    """

    CSS = """
    OfflineScreen {
        align: center middle;
    }

    #offline-dialog {
        grid-size: 2;
        grid-gutter: 1 2;
        grid-rows: 1fr 3;
        padding: 0 2;
        width: 60;
        height: 11;
        border: thick $error 80%;
        background: $surface;
    }

    #offline-message {
        column-span: 2;
        height: 3;
        content-align: center middle;
        text-style: bold;
    }

    Button {
        width: 100%;
    }
    """

    BINDINGS = [
        ("r", "retry", "Retry"),
        ("q", "quit_app", "Quit"),
    ]

    def compose(self) -> ComposeResult:
        with Grid(id="offline-dialog"):
            yield Label(
                "You are offline.\n"
                "[dim]Reconnect, then press [bold]r[/bold] to try again[/dim]",
                id="offline-message",
            )
            yield Button("Quit (q)", variant="default", id="offline-quit")
            yield Button("Retry (r)", variant="primary", id="offline-retry")

    def on_mount(self) -> None:
        logger.info("OfflineScreen shown")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "offline-retry")

    def action_retry(self) -> None:
        self.dismiss(True)

    def action_quit_app(self) -> None:
        self.dismiss(False)


class ErrorAlertScreen(ModalScreen[None]):
    """A transient alert with a single OK button."""

    CSS = """
    ErrorAlertScreen {
        align: center middle;
    }

    #alert-dialog {
        padding: 1 2;
        width: 64;
        height: auto;
        border: thick $warning 80%;
        background: $surface;
    }

    #alert-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #alert-message {
        margin-bottom: 1;
    }

    #alert-ok {
        width: 100%;
    }
    """

    BINDINGS = [
        ("escape", "close", "OK"),
        ("enter", "close", "OK"),
    ]

    def __init__(self, title: str, message: str):
        super().__init__()
        self.alert_title = title
        self.alert_message = message

    def compose(self) -> ComposeResult:
        with Vertical(id="alert-dialog"):
            yield Label(self.alert_title, id="alert-title", markup=False)
            yield Label(self.alert_message, id="alert-message", markup=False)
            yield Button("OK", variant="primary", id="alert-ok")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)

    def action_close(self) -> None:
        self.dismiss(None)
