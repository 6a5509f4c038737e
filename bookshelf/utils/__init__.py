"""Utility helpers for bookshelf."""
