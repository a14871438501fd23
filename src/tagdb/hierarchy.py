"""Tag hierarchy: parent/child edges between tags.

An edge ``(parent, child)`` means the child is more specific than the parent,
so tagging an item with the child also tags it with the parent. The edge set
is kept acyclic: ``add_edge`` refuses any edge whose child is already an
ancestor of its parent.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import defaultdict
from typing import Iterable, Mapping

from . import store
from .errors import DuplicateEdge, NotFound, WouldCreateCycle
from .store import Edge

logger = logging.getLogger(__name__)

UP = "up"
DOWN = "down"


def load_adjacency(conn: sqlite3.Connection, direction: str) -> dict[int, list[int]]:
    """Read the edge relation into an adjacency map.

    Args:
        conn: Database connection.
        direction: ``UP`` maps child -> parents, ``DOWN`` maps parent -> children.

    Returns:
        Dict of tag id to the ids of its direct neighbours in that direction.
    """
    if direction == UP:
        query = "SELECT child_id AS node, parent_id AS neighbour FROM tag_hierarchy"
    elif direction == DOWN:
        query = "SELECT parent_id AS node, child_id AS neighbour FROM tag_hierarchy"
    else:
        raise ValueError(f"Unknown direction: {direction}")

    adjacency: dict[int, list[int]] = defaultdict(list)
    for row in conn.execute(query):
        adjacency[row["node"]].append(row["neighbour"])
    return adjacency


def closure(adjacency: Mapping[int, Iterable[int]], start: int) -> set[int]:
    """Collect every node reachable from ``start``, excluding ``start`` itself.

    Worklist traversal: seed with the direct neighbours, pop one, record it,
    push its neighbours that have not been seen yet. A node reached by several
    paths is recorded once. ``start`` only appears in the result if the graph
    has a cycle through it, which ``add_edge`` prevents.
    """
    result: set[int] = set()
    worklist = list(adjacency.get(start, ()))
    while worklist:
        node = worklist.pop()
        if node in result:
            continue
        result.add(node)
        worklist.extend(n for n in adjacency.get(node, ()) if n not in result)
    return result


def ancestors(conn: sqlite3.Connection, tag_id: int) -> set[int]:
    """All parents of a tag, their parents, and so on."""
    return closure(load_adjacency(conn, UP), tag_id)


def descendants(conn: sqlite3.Connection, tag_id: int) -> set[int]:
    """All children of a tag, their children, and so on."""
    return closure(load_adjacency(conn, DOWN), tag_id)


def parents(conn: sqlite3.Connection, tag_id: int) -> list[int]:
    """Direct parents of a tag."""
    cursor = conn.execute(
        "SELECT parent_id FROM tag_hierarchy WHERE child_id = ? ORDER BY parent_id",
        (tag_id,),
    )
    return [row["parent_id"] for row in cursor.fetchall()]


def children(conn: sqlite3.Connection, tag_id: int) -> list[int]:
    """Direct children of a tag."""
    cursor = conn.execute(
        "SELECT child_id FROM tag_hierarchy WHERE parent_id = ? ORDER BY child_id",
        (tag_id,),
    )
    return [row["child_id"] for row in cursor.fetchall()]


def has_edge(conn: sqlite3.Connection, parent_id: int, child_id: int) -> bool:
    """Check whether ``parent_id`` is a direct parent of ``child_id``."""
    return store.find_id(
        conn, "tag_hierarchy", parent_id=parent_id, child_id=child_id
    ) is not None


def list_edges(conn: sqlite3.Connection) -> list[Edge]:
    """Every hierarchy edge, ordered by parent then child."""
    cursor = conn.execute(
        "SELECT parent_id, child_id FROM tag_hierarchy ORDER BY parent_id, child_id"
    )
    return [Edge(row["parent_id"], row["child_id"]) for row in cursor.fetchall()]


def add_edge(conn: sqlite3.Connection, parent_id: int, child_id: int) -> None:
    """Make ``parent_id`` a parent of ``child_id``.

    Run inside ``db.transaction`` so the cycle check and the insert see the
    same edge set.

    Raises:
        NotFound: Either tag does not exist.
        DuplicateEdge: The edge is already present.
        WouldCreateCycle: ``child_id`` is ``parent_id`` or one of its ancestors.
    """
    store.require(conn, "tags", parent_id)
    store.require(conn, "tags", child_id)

    if has_edge(conn, parent_id, child_id):
        logger.warning("Edge %d -> %d already exists", parent_id, child_id)
        raise DuplicateEdge(parent_id, child_id)

    if parent_id == child_id or child_id in ancestors(conn, parent_id):
        logger.warning("Rejected edge %d -> %d: would create a cycle", parent_id, child_id)
        raise WouldCreateCycle(parent_id, child_id)

    store.create(conn, "tag_hierarchy", parent_id=parent_id, child_id=child_id)
    logger.debug("Added edge %d -> %d", parent_id, child_id)


def remove_edge(conn: sqlite3.Connection, parent_id: int, child_id: int) -> None:
    """Delete the edge ``(parent_id, child_id)``.

    Tag assignments propagated through the edge earlier stay in place.

    Raises:
        NotFound: The edge does not exist.
    """
    removed = store.delete_where(
        conn, "tag_hierarchy", parent_id=parent_id, child_id=child_id
    )
    if not removed:
        raise NotFound(
            f"Tag {parent_id} is not a parent of tag {child_id}",
            {"parent_id": parent_id, "child_id": child_id},
        )
    logger.debug("Removed edge %d -> %d", parent_id, child_id)
