"""CLI command modules for bookshelf."""
