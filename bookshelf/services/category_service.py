"""
Category data source.

Fetches the category collection from the NYT Books API. The fetch runs on
a worker thread and reports back exactly once through a callback; callers
are responsible for marshaling that callback onto their own context.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import httpx

from ..config.constants import CATEGORY_LIST_PATH
from ..config.settings import Settings
from ..exceptions import CategoryParseError, FetchFailedError
from ..models.category import Category, parse_categories

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryFetchResult:
    """Outcome of one fetch: either categories or an error, never both."""

    categories: tuple[Category, ...] | None = None
    error: FetchFailedError | None = None

    def __post_init__(self) -> None:
        if (self.categories is None) == (self.error is None):
            raise ValueError("CategoryFetchResult needs exactly one of categories or error")

    @classmethod
    def success(cls, categories: tuple[Category, ...] | list[Category]) -> CategoryFetchResult:
        return cls(categories=tuple(categories))

    @classmethod
    def failure(cls, error: FetchFailedError) -> CategoryFetchResult:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None


FetchCallback = Callable[[CategoryFetchResult], None]


class CategoryDataSource(Protocol):
    """Anything that can fetch the category collection asynchronously."""

    def fetch_categories(self, callback: FetchCallback) -> None:
        """Start a fetch; call ``callback`` exactly once when it finishes."""
        ...


class NYTCategoryService:
    """Category data source backed by the NYT Books API."""

    def __init__(self, settings: Settings, client: httpx.Client | None = None):
        self.settings = settings
        self._client = client

    @property
    def url(self) -> str:
        return self.settings.api_url.rstrip("/") + CATEGORY_LIST_PATH

    def load_categories(self) -> tuple[Category, ...]:
        """Fetch and parse the category list, blocking the calling thread.

        Raises:
            FetchFailedError: On any transport, HTTP or parse failure
        """
        if not self.settings.has_api_key:
            raise FetchFailedError(
                "No API key configured (set BOOKSHELF_API_KEY or run 'bookshelf configure')"
            )

        params = {"api-key": self.settings.api_key}
        try:
            if self._client is not None:
                response = self._client.get(
                    self.url, params=params, timeout=self.settings.request_timeout
                )
            else:
                with httpx.Client() as client:
                    response = client.get(
                        self.url, params=params, timeout=self.settings.request_timeout
                    )
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchFailedError(
                "Category request rejected",
                status_code=e.response.status_code,
                url=self.url,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            raise FetchFailedError(f"Category request failed: {e}", url=self.url) from e
        except ValueError as e:
            raise CategoryParseError("Response body is not valid JSON", url=self.url) from e

        categories = parse_categories(payload)
        logger.info("Fetched %d categories", len(categories))
        return categories

    def fetch_categories(self, callback: FetchCallback) -> None:
        """Fetch on a daemon worker thread and report through ``callback``."""

        def worker() -> None:
            try:
                result = CategoryFetchResult.success(self.load_categories())
            except FetchFailedError as e:
                logger.warning("Category fetch failed: %s", e)
                result = CategoryFetchResult.failure(e)
            except Exception as e:
                logger.exception("Unexpected error while fetching categories")
                result = CategoryFetchResult.failure(
                    FetchFailedError(f"Category request failed: {e}", url=self.url)
                )
            callback(result)

        thread = threading.Thread(target=worker, name="category-fetch", daemon=True)
        thread.start()
