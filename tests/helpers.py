"""Test helper utilities.

This module provides helper functions for writing tests, including:
- Assertion helpers for item tags
- Database helpers for inspecting state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tagdb.config import Config


# -----------------------------------------------------------------------------
# Assertion Helpers
# -----------------------------------------------------------------------------


def assert_item_tags(config: "Config", item_id: int, expected: set[str]) -> None:
    """Assert that an item holds exactly the named tags.

    Example:
        assert_item_tags(config, item_id, {"a", "b", "c"})
    """
    from tagdb import core

    actual = {t.name for t in core.tags_of_item(item_id, config=config)}
    assert actual == expected, f"Item {item_id}: expected tags {expected}, got {actual}"


# -----------------------------------------------------------------------------
# Database Helpers
# -----------------------------------------------------------------------------


def count_rows(config: "Config", table: str, where: str = "", params: tuple = ()) -> int:
    """Count rows in a database table, optionally filtered.

    Example:
        assert count_rows(config, "item_tags", "tag_id = ?", (tag_id,)) == 0
    """
    from tagdb.db import get_db

    query = f"SELECT COUNT(*) FROM {table}"  # noqa: S608
    if where:
        query += f" WHERE {where}"

    with get_db(config) as conn:
        cursor = conn.execute(query, params)
        return cursor.fetchone()[0]


def table_exists(config: "Config", table: str) -> bool:
    """Check if a database table exists."""
    from tagdb.db import get_db

    with get_db(config) as conn:
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
            (table,),
        )
        return cursor.fetchone() is not None
