"""Configuration for bookshelf."""

from .settings import Settings, get_config_path, load_settings, save_config_file

__all__ = ["Settings", "get_config_path", "load_settings", "save_config_file"]
