"""
bookshelf settings.

Settings are resolved in three layers, later layers winning:
defaults from constants, ~/.config/bookshelf/config.json, then
environment variables.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from ..exceptions import ConfigurationError
from .constants import (
    BOOKSHELF_CONFIG_DIR,
    CONFIG_FILE_NAME,
    DEFAULT_API_URL,
    DEFAULT_REACHABILITY_HOST,
    DEFAULT_REACHABILITY_INTERVAL_SECONDS,
    DEFAULT_REACHABILITY_PORT,
    DEFAULT_REACHABILITY_TIMEOUT_SECONDS,
    DEFAULT_REQUEST_TIMEOUT_SECONDS,
    DEFAULT_SEARCH_DEBOUNCE_SECONDS,
    ENV_VAR_DEFINITIONS,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime configuration."""

    api_key: str = ""
    api_url: str = DEFAULT_API_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    reachability_host: str = DEFAULT_REACHABILITY_HOST
    reachability_port: int = DEFAULT_REACHABILITY_PORT
    reachability_interval: float = DEFAULT_REACHABILITY_INTERVAL_SECONDS
    reachability_timeout: float = DEFAULT_REACHABILITY_TIMEOUT_SECONDS
    search_debounce: float = DEFAULT_SEARCH_DEBOUNCE_SECONDS
    config_dir: Path = BOOKSHELF_CONFIG_DIR

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


_FIELD_TYPES: dict[str, type] = {
    "api_key": str,
    "api_url": str,
    "request_timeout": float,
    "reachability_host": str,
    "reachability_port": int,
    "reachability_interval": float,
    "reachability_timeout": float,
    "search_debounce": float,
}


def get_config_path(config_dir: Path | None = None) -> Path:
    """Get path to the JSON config file (it may not exist)."""
    return (config_dir or BOOKSHELF_CONFIG_DIR) / CONFIG_FILE_NAME


def _coerce(name: str, value: Any, expected: type, source: str) -> Any:
    """Convert a raw config value to the field's type."""
    try:
        coerced = expected(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid value for {name}", setting=name, value=value, source=source
        ) from e
    if expected in (int, float) and coerced < 0:
        raise ConfigurationError(
            f"{name} must not be negative", setting=name, value=value, source=source
        )
    return coerced


def load_config_file(config_dir: Path | None = None) -> dict[str, Any]:
    """
    Load the JSON config file.

    Returns:
        Config dict, or an empty dict if the file is missing or invalid
    """
    path = get_config_path(config_dir)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning("Ignoring unreadable config file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config file %s: top level is not an object", path)
        return {}
    return data


def load_settings(
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve settings from defaults, the config file and the environment.

    Args:
        config_dir: Directory holding config.json (defaults to BOOKSHELF_CONFIG_DIR)
        environ: Environment mapping (defaults to os.environ)

    Raises:
        ConfigurationError: If a value cannot be parsed as its field's type
    """
    environ = os.environ if environ is None else environ
    config_dir = config_dir or BOOKSHELF_CONFIG_DIR
    overrides: dict[str, Any] = {"config_dir": config_dir}

    for key, value in load_config_file(config_dir).items():
        expected = _FIELD_TYPES.get(key)
        if expected is None:
            logger.debug("Unknown config key %r ignored", key)
            continue
        overrides[key] = _coerce(key, value, expected, source="config.json")

    for env_name, definition in ENV_VAR_DEFINITIONS.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        field_name = definition["field"]
        overrides[field_name] = _coerce(field_name, raw, definition["type"], source=env_name)

    known = {f.name for f in fields(Settings)}
    return replace(Settings(), **{k: v for k, v in overrides.items() if k in known})


def save_config_file(config: dict[str, Any], config_dir: Path | None = None) -> Path:
    """Persist config values to config.json, creating the directory if needed."""
    path = get_config_path(config_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config, indent=2) + "\n")
    return path
