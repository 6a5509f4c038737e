"""Domain models for bookshelf."""

from .category import Category, parse_categories, slugify

__all__ = ["Category", "parse_categories", "slugify"]
