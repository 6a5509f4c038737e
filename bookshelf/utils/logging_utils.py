"""Logging setup for bookshelf.

Modules use the standard pattern:

    import logging
    logger = logging.getLogger(__name__)

The entry points decide where records go: the CLI logs to stderr plus a
file, the TUI logs to a rotating file only so nothing is written over
Textual's screen.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from ..config.constants import BOOKSHELF_CONFIG_DIR, LOG_FILE_NAME, TUI_LOG_FILE_NAME

# Max log file size: 5MB, keep 2 backups
_MAX_LOG_BYTES = 5 * 1024 * 1024
_BACKUP_COUNT = 2

logger = logging.getLogger("bookshelf")


def _file_handler(log_file: Path, level: int, formatter: logging.Formatter) -> Optional[logging.Handler]:
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file, maxBytes=_MAX_LOG_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        )
    except OSError as e:
        print(f"Warning: could not open log file {log_file}: {e}", file=sys.stderr)
        return None
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None,
) -> None:
    """
    Set up logging for CLI commands.

    Args:
        verbose: Enable DEBUG output on the console
        quiet: Only show errors on the console
        log_file: Log file path (defaults to ~/.config/bookshelf/bookshelf.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)
    logger.propagate = True

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(console_handler)

    detailed = logging.Formatter(
        "%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s"
    )
    handler = _file_handler(log_file or BOOKSHELF_CONFIG_DIR / LOG_FILE_NAME, logging.DEBUG, detailed)
    if handler is not None:
        logger.addHandler(handler)


def setup_tui_logging(log_file: Optional[Path] = None) -> logging.Logger:
    """
    Set up logging while the TUI owns the terminal.

    Everything goes to a rotating file; bookshelf.* records at INFO,
    third-party libraries only at WARNING.
    """
    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    handler = _file_handler(
        log_file or BOOKSHELF_CONFIG_DIR / TUI_LOG_FILE_NAME, logging.DEBUG, formatter
    )

    logger.handlers.clear()
    if handler is not None:
        logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False

    logging.getLogger("httpx").setLevel(logging.WARNING)
    return logger
