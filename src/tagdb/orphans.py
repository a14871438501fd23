"""Read-only scans for rows nothing refers to."""

from __future__ import annotations

import sqlite3

from .store import Item, Namespace, Tag


def tag_orphans(conn: sqlite3.Connection) -> list[Tag]:
    """Tags not assigned to any item."""
    cursor = conn.execute(
        """
        SELECT id, name FROM tags
        WHERE NOT EXISTS (SELECT 1 FROM item_tags WHERE item_tags.tag_id = tags.id)
        ORDER BY id
        """
    )
    return [Tag(row["id"], row["name"]) for row in cursor.fetchall()]


def namespace_orphans(conn: sqlite3.Connection) -> list[Namespace]:
    """Namespaces holding no tag."""
    cursor = conn.execute(
        """
        SELECT id, name FROM namespaces
        WHERE NOT EXISTS (
            SELECT 1 FROM namespace_map WHERE namespace_map.namespace_id = namespaces.id
        )
        ORDER BY id
        """
    )
    return [Namespace(row["id"], row["name"]) for row in cursor.fetchall()]


def item_orphans(conn: sqlite3.Connection) -> list[Item]:
    """Items with no tags."""
    cursor = conn.execute(
        """
        SELECT id, path FROM items
        WHERE NOT EXISTS (SELECT 1 FROM item_tags WHERE item_tags.item_id = items.id)
        ORDER BY id
        """
    )
    return [Item(row["id"], row["path"]) for row in cursor.fetchall()]
