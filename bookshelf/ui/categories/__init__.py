"""
Category list - searchable grid of bestseller list categories.

Provides:
- CategoryScreen: Textual screen rendering the list
- CategoryListPresenter: View-state logic behind the screen
- filter_categories: Case-insensitive display name search
"""

from .category_presenter import CategoryListPresenter, CategoryListVM, LoadState
from .category_screen import CategoryScreen
from .search_filter import filter_categories

__all__ = [
    "CategoryListPresenter",
    "CategoryListVM",
    "CategoryScreen",
    "LoadState",
    "filter_categories",
]
