"""Search filtering for the category list."""

from collections.abc import Iterable

from ...models.category import Category


def filter_categories(categories: Iterable[Category], query: str) -> tuple[Category, ...]:
    """Return the categories whose display name contains ``query``, ignoring case.

    Source order is preserved. An empty query returns every category.
    Whitespace is matched literally, so " " selects multi-word names.
    """
    categories = tuple(categories)
    if not query:
        return categories

    needle = query.casefold()
    return tuple(c for c in categories if needle in c.display_name.casefold())
