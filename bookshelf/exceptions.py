"""Custom exception hierarchy for bookshelf.

Exception Hierarchy:
    BookshelfError (base)
    ├── NetworkUnreachableError - no connectivity when a fetch was wanted
    ├── FetchFailedError - the category fetch failed (retryable)
    │   └── CategoryParseError - the response body was not a category list
    ├── IndexOutOfRangeError - a stale index read past the displayed set
    └── ConfigurationError - settings/configuration issues

Usage:
    from bookshelf.exceptions import FetchFailedError

    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchFailedError("Category request rejected", status_code=...) from e
"""

from typing import Any, Optional


class BookshelfError(Exception):
    """Base exception for all bookshelf errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., URLs, indices)
        retryable: Whether this error might succeed on retry
    """

    def __init__(
        self,
        message: str,
        *,
        retryable: bool = False,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.retryable = retryable
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class NetworkUnreachableError(BookshelfError):
    """The network is not reachable."""

    def __init__(self, message: str = "Network is unreachable", **context: Any) -> None:
        super().__init__(message, retryable=True, **context)


class FetchFailedError(BookshelfError):
    """Fetching the category collection failed."""

    def __init__(
        self,
        message: str = "Failed to fetch categories",
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        **context: Any,
    ) -> None:
        if status_code is not None:
            context["status_code"] = status_code
        if url:
            context["url"] = url
        self.status_code = status_code
        super().__init__(message, retryable=True, **context)


class CategoryParseError(FetchFailedError):
    """The data source answered with something that is not a category list."""

    def __init__(self, message: str = "Malformed category response", **context: Any) -> None:
        super().__init__(message, **context)


class IndexOutOfRangeError(BookshelfError, IndexError):
    """An index was requested beyond the currently displayed items.

    This means the renderer is reading a stale layout, so it is raised
    rather than answered with a placeholder.
    """

    def __init__(self, index: int, count: int) -> None:
        self.index = index
        self.count = count
        super().__init__("Item index out of range", index=index, count=count)


class ConfigurationError(BookshelfError):
    """Configuration is missing or invalid."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting:
            context["setting"] = setting
        super().__init__(message, **context)
