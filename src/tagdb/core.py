"""Core API for tagdb.

Each function opens its own connection from the configuration it is given
(or the global one) and closes it before returning. Writes run in a single
``BEGIN IMMEDIATE`` transaction so hierarchy checks and tag propagation see
a stable edge set.
"""

import logging
from typing import Optional

from . import hierarchy, orphans, query, store, tagging
from .config import Config, get_config
from .db import get_db, init_db, recreate_db, transaction
from .errors import NotFound
from .store import Edge, Item, Namespace, Tag

logger = logging.getLogger(__name__)


def ensure_initialized(config: Optional[Config] = None) -> None:
    """Ensure the database file and schema exist."""
    if config is None:
        config = get_config()
    init_db(config)


def _prepare(config: Optional[Config]) -> Config:
    if config is None:
        config = get_config()
    ensure_initialized(config)
    return config


# --- Items ---


def create_item(
    path: str,
    tags: Optional[list[str]] = None,
    create_if_missing: bool = False,
    config: Optional[Config] = None,
) -> int:
    """Add an item, optionally tagged.

    The item and all of its tags are written in one transaction: if any tag
    is rejected, the item is not added either.

    Args:
        path: Path identifying the item (unique).
        tags: Tag names to assign, ancestors included.
        create_if_missing: Create tags that don't exist yet.
        config: Configuration to use.

    Returns:
        The new item ID.

    Raises:
        UniqueViolation: An item with this path exists.
        UnknownTag: A tag does not exist and ``create_if_missing`` is False.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        item_id = store.create(conn, "items", path=path)
        for name in tags or []:
            tagging.assign(conn, item_id, name, create_if_missing)

    logger.debug("Created item %s (%d)", path, item_id)
    return item_id


def delete_item(item_id: int, config: Optional[Config] = None) -> None:
    """Delete an item and its tag assignments.

    Raises:
        NotFound: No item has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.delete(conn, "items", item_id)


def delete_item_by_path(path: str, config: Optional[Config] = None) -> None:
    """Delete an item by path and its tag assignments.

    Raises:
        NotFound: No item has this path.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        item_id = store.find_id(conn, "items", path=path)
        if item_id is None:
            raise NotFound(f"Item not found: {path}", {"path": path})
        store.delete(conn, "items", item_id)


def get_item(item_id: int, config: Optional[Config] = None) -> Optional[Item]:
    """Get an item by ID."""
    config = _prepare(config)

    with get_db(config) as conn:
        path = store.get_label(conn, "items", item_id)

    return Item(item_id, path) if path is not None else None


def get_item_by_path(path: str, config: Optional[Config] = None) -> Optional[Item]:
    """Get an item by path."""
    config = _prepare(config)

    with get_db(config) as conn:
        item_id = store.find_id(conn, "items", path=path)

    return Item(item_id, path) if item_id is not None else None


def item_path(item_id: int, config: Optional[Config] = None) -> Optional[str]:
    """Get the path of an item, or None."""
    item = get_item(item_id, config)
    return item.path if item else None


def update_item_path(item_id: int, new_path: str, config: Optional[Config] = None) -> None:
    """Point an item at a new path, keeping its tags.

    Raises:
        UniqueViolation: Another item has ``new_path``.
        NotFound: No item has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.rename(conn, "items", item_id, new_path)


def list_items(config: Optional[Config] = None) -> list[Item]:
    """List all items ordered by ID."""
    config = _prepare(config)

    with get_db(config) as conn:
        return [Item(*row) for row in store.list_rows(conn, "items")]


# --- Tags ---


def create_tag(name: str, config: Optional[Config] = None) -> int:
    """Add a tag.

    Raises:
        UniqueViolation: A tag with this name exists.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        tag_id = store.create(conn, "tags", name=name)

    logger.debug("Created tag %s (%d)", name, tag_id)
    return tag_id


def create_tags(names: list[str], config: Optional[Config] = None) -> list[Optional[int]]:
    """Add several tags.

    Returns:
        One entry per name: the new ID, or None if the name was taken.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        return tagging.create_tags(conn, names)


def delete_tag(tag_id: int, config: Optional[Config] = None) -> None:
    """Delete a tag.

    Its hierarchy edges (as parent or child), namespace assignment and item
    assignments are removed with it.

    Raises:
        NotFound: No tag has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.delete(conn, "tags", tag_id)


def delete_tags(tag_ids: list[int], config: Optional[Config] = None) -> None:
    """Delete several tags at once.

    Either every tag is deleted or, when one is missing, none is.

    Raises:
        NotFound: One of the IDs names no tag.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        for tag_id in tag_ids:
            store.delete(conn, "tags", tag_id)

    logger.debug("Deleted %d tags", len(tag_ids))


def rename_tag(tag_id: int, new_name: str, config: Optional[Config] = None) -> None:
    """Rename a tag.

    Raises:
        UniqueViolation: Another tag is called ``new_name``.
        NotFound: No tag has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.rename(conn, "tags", tag_id, new_name)


def get_tag(tag_id: int, config: Optional[Config] = None) -> Optional[Tag]:
    """Get a tag by ID."""
    config = _prepare(config)

    with get_db(config) as conn:
        name = store.get_label(conn, "tags", tag_id)

    return Tag(tag_id, name) if name is not None else None


def get_tag_by_name(name: str, config: Optional[Config] = None) -> Optional[Tag]:
    """Get a tag by its exact name."""
    config = _prepare(config)

    with get_db(config) as conn:
        tag_id = store.find_id(conn, "tags", name=name)

    return Tag(tag_id, name) if tag_id is not None else None


def tag_name(tag_id: int, config: Optional[Config] = None) -> Optional[str]:
    """Get the name of a tag, or None."""
    tag = get_tag(tag_id, config)
    return tag.name if tag else None


def list_tags(config: Optional[Config] = None) -> list[Tag]:
    """List all tags ordered by ID."""
    config = _prepare(config)

    with get_db(config) as conn:
        return [Tag(*row) for row in store.list_rows(conn, "tags")]


# --- Assignment ---


def assign(
    item_id: int,
    tag_name: str,
    create_if_missing: bool = False,
    config: Optional[Config] = None,
) -> int:
    """Tag an item, together with every ancestor of the tag.

    Args:
        item_id: Item to tag.
        tag_name: Exact tag name.
        create_if_missing: Create the tag when no tag has this name.
        config: Configuration to use.

    Returns:
        The ID of the directly assigned tag.

    Raises:
        NotFound: The item does not exist.
        UnknownTag: The tag does not exist and ``create_if_missing`` is False.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        return tagging.assign(conn, item_id, tag_name, create_if_missing)


def assign_tags(
    item_id: int,
    tag_names: list[str],
    create_if_missing: bool = False,
    config: Optional[Config] = None,
) -> list[int]:
    """Tag an item with several tags in one transaction.

    If any tag is rejected, none of them is assigned.

    Returns:
        The IDs of the directly assigned tags, in order.

    Raises:
        NotFound: The item does not exist.
        UnknownTag: A tag does not exist and ``create_if_missing`` is False.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        return [tagging.assign(conn, item_id, name, create_if_missing) for name in tag_names]


def unassign(tag_id: int, item_id: int, config: Optional[Config] = None) -> None:
    """Remove a tag from an item, leaving implied ancestor tags in place.

    Raises:
        NotFound: The item does not have this tag.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        tagging.unassign(conn, tag_id, item_id)


def tags_of_item(item_id: int, config: Optional[Config] = None) -> list[Tag]:
    """List the tags an item holds, direct and implied."""
    config = _prepare(config)

    with get_db(config) as conn:
        return tagging.tags_of_item(conn, item_id)


def items_with_tag(tag_id: int, config: Optional[Config] = None) -> list[Item]:
    """List the items holding a tag."""
    config = _prepare(config)

    with get_db(config) as conn:
        return tagging.items_with_tag(conn, tag_id)


# --- Hierarchy ---


def add_hierarchy_edge(parent_tag_id: int, child_tag_id: int, config: Optional[Config] = None) -> None:
    """Make one tag a parent of another.

    Raises:
        NotFound: Either tag does not exist.
        DuplicateEdge: The edge already exists.
        WouldCreateCycle: The child is the parent or one of its ancestors.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        hierarchy.add_edge(conn, parent_tag_id, child_tag_id)


def remove_hierarchy_edge(parent_tag_id: int, child_tag_id: int, config: Optional[Config] = None) -> None:
    """Remove a parent/child edge. Assignments made through it are kept.

    Raises:
        NotFound: The edge does not exist.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        hierarchy.remove_edge(conn, parent_tag_id, child_tag_id)


def has_edge(parent_tag_id: int, child_tag_id: int, config: Optional[Config] = None) -> bool:
    """Check for a direct parent/child edge."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.has_edge(conn, parent_tag_id, child_tag_id)


def ancestors(tag_id: int, config: Optional[Config] = None) -> set[int]:
    """IDs of every tag implied by ``tag_id``."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.ancestors(conn, tag_id)


def descendants(tag_id: int, config: Optional[Config] = None) -> set[int]:
    """IDs of every tag that implies ``tag_id``."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.descendants(conn, tag_id)


def parents(tag_id: int, config: Optional[Config] = None) -> list[int]:
    """IDs of the direct parents of a tag."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.parents(conn, tag_id)


def children(tag_id: int, config: Optional[Config] = None) -> list[int]:
    """IDs of the direct children of a tag."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.children(conn, tag_id)


def list_edges(config: Optional[Config] = None) -> list[Edge]:
    """List every hierarchy edge."""
    config = _prepare(config)

    with get_db(config) as conn:
        return hierarchy.list_edges(conn)


# --- Search ---


def compile_and_run(query_text: str, config: Optional[Config] = None) -> list[Item]:
    """Find items holding every tag named in ``query_text``.

    Tokens are separated by whitespace and must match tag names exactly.
    Tokens naming no tag are ignored; if none match, all items are returned.
    """
    config = _prepare(config)

    with get_db(config) as conn:
        return query.compile_and_run(conn, query_text)


def search_tags(substring: str, config: Optional[Config] = None) -> list[Tag]:
    """Find tags whose name contains ``substring``."""
    config = _prepare(config)

    with get_db(config) as conn:
        return query.search_tags(conn, substring)


# --- Namespaces ---


def create_namespace(name: str, config: Optional[Config] = None) -> int:
    """Add a namespace.

    Raises:
        UniqueViolation: A namespace with this name exists.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        return store.create(conn, "namespaces", name=name)


def delete_namespace(namespace_id: int, config: Optional[Config] = None) -> None:
    """Delete a namespace; its tags lose their namespace but are kept.

    Raises:
        NotFound: No namespace has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.delete(conn, "namespaces", namespace_id)


def rename_namespace(namespace_id: int, new_name: str, config: Optional[Config] = None) -> None:
    """Rename a namespace.

    Raises:
        UniqueViolation: Another namespace is called ``new_name``.
        NotFound: No namespace has this ID.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        store.rename(conn, "namespaces", namespace_id, new_name)


def get_namespace_by_name(name: str, config: Optional[Config] = None) -> Optional[Namespace]:
    """Get a namespace by its exact name."""
    config = _prepare(config)

    with get_db(config) as conn:
        namespace_id = store.find_id(conn, "namespaces", name=name)

    return Namespace(namespace_id, name) if namespace_id is not None else None


def namespace_name(namespace_id: int, config: Optional[Config] = None) -> Optional[str]:
    """Get the name of a namespace, or None."""
    config = _prepare(config)

    with get_db(config) as conn:
        return store.get_label(conn, "namespaces", namespace_id)


def list_namespaces(config: Optional[Config] = None) -> list[Namespace]:
    """List all namespaces ordered by ID."""
    config = _prepare(config)

    with get_db(config) as conn:
        return [Namespace(*row) for row in store.list_rows(conn, "namespaces")]


def set_namespace(tag_id: int, namespace_id: int, config: Optional[Config] = None) -> None:
    """Put a tag into a namespace.

    Raises:
        NotFound: The tag or namespace does not exist.
        UniqueViolation: The tag already has a namespace.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        tagging.set_namespace(conn, tag_id, namespace_id)


def clear_namespace(tag_id: int, config: Optional[Config] = None) -> bool:
    """Take a tag out of its namespace.

    Returns:
        True if a namespace was removed, False if the tag had none.

    Raises:
        NotFound: The tag does not exist.
    """
    config = _prepare(config)

    with get_db(config) as conn, transaction(conn):
        return tagging.clear_namespace(conn, tag_id)


def namespace_of_tag(tag_id: int, config: Optional[Config] = None) -> Optional[int]:
    """Get the namespace ID of a tag, or None."""
    config = _prepare(config)

    with get_db(config) as conn:
        return tagging.namespace_of_tag(conn, tag_id)


def tags_in_namespace(namespace_id: int, config: Optional[Config] = None) -> list[Tag]:
    """List the tags in a namespace."""
    config = _prepare(config)

    with get_db(config) as conn:
        return tagging.tags_in_namespace(conn, namespace_id)


# --- Maintenance ---


def orphan_tags(config: Optional[Config] = None) -> list[Tag]:
    """Tags assigned to no item."""
    config = _prepare(config)

    with get_db(config) as conn:
        return orphans.tag_orphans(conn)


def orphan_namespaces(config: Optional[Config] = None) -> list[Namespace]:
    """Namespaces holding no tag."""
    config = _prepare(config)

    with get_db(config) as conn:
        return orphans.namespace_orphans(conn)


def orphan_items(config: Optional[Config] = None) -> list[Item]:
    """Items with no tags."""
    config = _prepare(config)

    with get_db(config) as conn:
        return orphans.item_orphans(conn)


def delete_all(config: Optional[Config] = None) -> None:
    """Remove the database and start over with an empty one."""
    if config is None:
        config = get_config()
    recreate_db(config)
