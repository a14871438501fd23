"""Tag assignment: attaching tags to items and tags to namespaces."""

from __future__ import annotations

import logging
import sqlite3
from typing import Optional

from . import hierarchy, store
from .errors import NotFound, UniqueViolation, UnknownTag

logger = logging.getLogger(__name__)


def resolve_tag(conn: sqlite3.Connection, name: str, create_if_missing: bool = False) -> int:
    """Return the id of the tag called ``name``.

    Raises:
        UnknownTag: The tag does not exist and ``create_if_missing`` is False.
    """
    tag_id = store.find_id(conn, "tags", name=name)
    if tag_id is not None:
        return tag_id
    if not create_if_missing:
        raise UnknownTag(name)
    tag_id = store.create(conn, "tags", name=name)
    logger.debug("Created tag %r (%d) on assignment", name, tag_id)
    return tag_id


def create_tags(conn: sqlite3.Connection, names: list[str]) -> list[Optional[int]]:
    """Create several tags; existing names yield None instead of an id."""
    ids: list[Optional[int]] = []
    for name in names:
        try:
            ids.append(store.create(conn, "tags", name=name))
        except UniqueViolation:
            logger.warning("Tag already exists: %s", name)
            ids.append(None)
    return ids


def assign(
    conn: sqlite3.Connection,
    item_id: int,
    tag_name: str,
    create_if_missing: bool = False,
) -> int:
    """Tag an item, along with every ancestor of the tag.

    Assigning a tag the item already holds is a no-op, as is each ancestor
    the item already holds. Run inside ``db.transaction`` so the ancestor set
    cannot change between being read and being written.

    Args:
        conn: Database connection.
        item_id: Item to tag.
        tag_name: Exact tag name.
        create_if_missing: Create the tag if no tag has this name.

    Returns:
        The id of the directly assigned tag.

    Raises:
        NotFound: The item does not exist.
        UnknownTag: The tag does not exist and ``create_if_missing`` is False.
    """
    store.require(conn, "items", item_id)
    tag_id = resolve_tag(conn, tag_name, create_if_missing)

    if not store.insert_ignore(conn, "item_tags", item_id=item_id, tag_id=tag_id):
        logger.debug("Item %d already has tag %d", item_id, tag_id)

    implied = hierarchy.ancestors(conn, tag_id)
    for ancestor_id in sorted(implied):
        store.insert_ignore(conn, "item_tags", item_id=item_id, tag_id=ancestor_id)

    logger.debug(
        "Assigned tag %d to item %d (%d implied)", tag_id, item_id, len(implied)
    )
    return tag_id


def unassign(conn: sqlite3.Connection, tag_id: int, item_id: int) -> None:
    """Remove one tag from an item.

    Only the row for this tag goes; ancestor tags propagated with it stay.

    Raises:
        NotFound: The item does not hold this tag.
    """
    removed = store.delete_where(conn, "item_tags", item_id=item_id, tag_id=tag_id)
    if not removed:
        raise NotFound(
            f"Item {item_id} does not have tag {tag_id}",
            {"item_id": item_id, "tag_id": tag_id},
        )


def tags_of_item(conn: sqlite3.Connection, item_id: int) -> list[store.Tag]:
    """Every tag an item holds, direct or implied, ordered by tag id."""
    cursor = conn.execute(
        """
        SELECT tags.id, tags.name
        FROM item_tags
        JOIN tags ON tags.id = item_tags.tag_id
        WHERE item_tags.item_id = ?
        ORDER BY tags.id
        """,
        (item_id,),
    )
    return [store.Tag(row["id"], row["name"]) for row in cursor.fetchall()]


def items_with_tag(conn: sqlite3.Connection, tag_id: int) -> list[store.Item]:
    """Every item holding a tag, ordered by item id."""
    cursor = conn.execute(
        """
        SELECT items.id, items.path
        FROM item_tags
        JOIN items ON items.id = item_tags.item_id
        WHERE item_tags.tag_id = ?
        ORDER BY items.id
        """,
        (tag_id,),
    )
    return [store.Item(row["id"], row["path"]) for row in cursor.fetchall()]


# --- Namespaces ---


def set_namespace(conn: sqlite3.Connection, tag_id: int, namespace_id: int) -> None:
    """Put a tag into a namespace.

    Raises:
        NotFound: The tag or namespace does not exist.
        UniqueViolation: The tag already has a namespace; clear it first.
    """
    store.require(conn, "tags", tag_id)
    store.require(conn, "namespaces", namespace_id)
    store.create(conn, "namespace_map", namespace_id=namespace_id, tag_id=tag_id)


def clear_namespace(conn: sqlite3.Connection, tag_id: int) -> bool:
    """Take a tag out of its namespace.

    Returns:
        True if the tag had a namespace, False if it had none.

    Raises:
        NotFound: The tag does not exist.
    """
    store.require(conn, "tags", tag_id)
    return store.delete_where(conn, "namespace_map", tag_id=tag_id) > 0


def namespace_of_tag(conn: sqlite3.Connection, tag_id: int) -> Optional[int]:
    """The namespace id of a tag, or None."""
    cursor = conn.execute(
        "SELECT namespace_id FROM namespace_map WHERE tag_id = ?", (tag_id,)
    )
    row = cursor.fetchone()
    return row["namespace_id"] if row else None


def tags_in_namespace(conn: sqlite3.Connection, namespace_id: int) -> list[store.Tag]:
    """Every tag in a namespace, ordered by tag id."""
    cursor = conn.execute(
        """
        SELECT tags.id, tags.name
        FROM namespace_map
        JOIN tags ON tags.id = namespace_map.tag_id
        WHERE namespace_map.namespace_id = ?
        ORDER BY tags.id
        """,
        (namespace_id,),
    )
    return [store.Tag(row["id"], row["name"]) for row in cursor.fetchall()]
