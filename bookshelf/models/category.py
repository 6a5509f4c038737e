"""
Category model.

A category is one bestseller list as reported by the NYT Books API
"list names" endpoint. Categories are immutable once fetched.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..exceptions import CategoryParseError

_SLUG_RE = re.compile(r"[^a-z0-9]+")


def slugify(name: str) -> str:
    """Turn a list name into the API's encoded form ("Hardcover Fiction" -> "hardcover-fiction")."""
    return _SLUG_RE.sub("-", name.lower()).strip("-")


@dataclass(frozen=True)
class Category:
    """A named grouping presented in the browsable list."""

    key: str
    display_name: str
    list_name: str = ""
    metadata: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False, hash=False
    )

    @classmethod
    def from_api(cls, record: Mapping[str, Any]) -> Category:
        """Build a Category from one "list names" record.

        Raises:
            CategoryParseError: If the record has neither a list name nor a display name
        """
        if not isinstance(record, Mapping):
            raise CategoryParseError("Category record is not an object", record=record)

        list_name = str(record.get("list_name") or "").strip()
        display_name = str(record.get("display_name") or "").strip() or list_name
        if not display_name:
            raise CategoryParseError("Category record has no name", record=dict(record))

        key = str(record.get("list_name_encoded") or "").strip() or slugify(
            list_name or display_name
        )
        extra = {
            k: v
            for k, v in record.items()
            if k not in ("list_name", "display_name", "list_name_encoded")
        }
        return cls(
            key=key,
            display_name=display_name,
            list_name=list_name or display_name,
            metadata=MappingProxyType(extra),
        )

    @property
    def updated(self) -> str:
        """Publication cadence ("WEEKLY", "MONTHLY") if the source reported one."""
        return str(self.metadata.get("updated", ""))


def parse_categories(payload: Any) -> tuple[Category, ...]:
    """Parse a full "list names" response body, keeping source order.

    Duplicate records are kept; callers must tolerate them.

    Raises:
        CategoryParseError: If the payload is not a successful category listing
    """
    if not isinstance(payload, Mapping):
        raise CategoryParseError("Response body is not an object")

    status = payload.get("status")
    if status is not None and str(status).upper() != "OK":
        raise CategoryParseError("Data source reported failure", status=status)

    results = payload.get("results")
    if not isinstance(results, list):
        raise CategoryParseError("Response has no results list")

    return tuple(Category.from_api(record) for record in results)
