"""Row-level access to the tagdb tables.

All functions take an open connection and never commit; callers decide the
transaction boundary. Table and column names are checked against
``TABLE_COLUMNS`` before being placed in SQL, every value is a bound
parameter.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, NamedTuple, Optional

from .errors import NotFound, integrity_errors

logger = logging.getLogger(__name__)


class Tag(NamedTuple):
    """A tag row."""

    id: int
    name: str


class Item(NamedTuple):
    """An item row (an image identified by its path)."""

    id: int
    path: str


class Namespace(NamedTuple):
    """A namespace row."""

    id: int
    name: str


class Edge(NamedTuple):
    """A hierarchy edge: ``child_id`` implies ``parent_id``."""

    parent_id: int
    child_id: int


# Writable columns per table
TABLE_COLUMNS: dict[str, tuple[str, ...]] = {
    "tags": ("name",),
    "namespaces": ("name",),
    "items": ("path",),
    "namespace_map": ("namespace_id", "tag_id"),
    "tag_hierarchy": ("parent_id", "child_id"),
    "item_tags": ("item_id", "tag_id"),
}

# Human-readable column of each entity table
LABEL_COLUMNS = {
    "tags": "name",
    "namespaces": "name",
    "items": "path",
}


def _check_columns(table: str, columns) -> None:
    if table not in TABLE_COLUMNS:
        raise ValueError(f"Unknown table: {table}")
    unknown = [c for c in columns if c != "id" and c not in TABLE_COLUMNS[table]]
    if unknown:
        raise ValueError(f"Unknown column(s) for {table}: {', '.join(unknown)}")


def create(conn: sqlite3.Connection, table: str, **record: Any) -> int:
    """Insert a row and return its id.

    Raises:
        UniqueViolation: A uniqueness constraint would be broken.
        NotFound: A referenced row does not exist.
    """
    _check_columns(table, record)
    columns = ", ".join(record)
    placeholders = ", ".join("?" * len(record))
    with integrity_errors(table, **record):
        cursor = conn.execute(
            f"INSERT INTO {table} ({columns}) VALUES ({placeholders})",  # noqa: S608
            tuple(record.values()),
        )
    return cursor.lastrowid


def insert_ignore(conn: sqlite3.Connection, table: str, **record: Any) -> bool:
    """Insert a row unless it already exists.

    Returns:
        True if a row was inserted, False if it was already present.
    """
    _check_columns(table, record)
    columns = ", ".join(record)
    placeholders = ", ".join("?" * len(record))
    with integrity_errors(table, **record):
        cursor = conn.execute(
            f"INSERT OR IGNORE INTO {table} ({columns}) VALUES ({placeholders})",  # noqa: S608
            tuple(record.values()),
        )
    return cursor.rowcount > 0


def find_id(conn: sqlite3.Connection, table: str, **criteria: Any) -> Optional[int]:
    """Return the id of the row matching every criterion, or None."""
    _check_columns(table, criteria)
    where = " AND ".join(f"{column} = ?" for column in criteria)
    cursor = conn.execute(
        f"SELECT id FROM {table} WHERE {where}",  # noqa: S608
        tuple(criteria.values()),
    )
    row = cursor.fetchone()
    return row["id"] if row else None


def exists(conn: sqlite3.Connection, table: str, row_id: int) -> bool:
    """Check whether a row with the given id exists."""
    _check_columns(table, ())
    cursor = conn.execute(f"SELECT 1 FROM {table} WHERE id = ?", (row_id,))  # noqa: S608
    return cursor.fetchone() is not None


def require(conn: sqlite3.Connection, table: str, row_id: int) -> None:
    """Raise NotFound unless the row exists."""
    if not exists(conn, table, row_id):
        raise NotFound(f"No row {row_id} in {table}", {"table": table, "id": row_id})


def delete(conn: sqlite3.Connection, table: str, row_id: int) -> None:
    """Delete a row by id; foreign keys cascade to the relation tables.

    Raises:
        NotFound: No row has this id.
    """
    _check_columns(table, ())
    cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (row_id,))  # noqa: S608
    if cursor.rowcount == 0:
        raise NotFound(f"No row {row_id} in {table}", {"table": table, "id": row_id})
    logger.debug("Deleted %s row %d", table, row_id)


def delete_where(conn: sqlite3.Connection, table: str, **criteria: Any) -> int:
    """Delete rows matching every criterion and return how many went."""
    _check_columns(table, criteria)
    where = " AND ".join(f"{column} = ?" for column in criteria)
    cursor = conn.execute(
        f"DELETE FROM {table} WHERE {where}",  # noqa: S608
        tuple(criteria.values()),
    )
    return cursor.rowcount


def rename(conn: sqlite3.Connection, table: str, row_id: int, new_name: str) -> None:
    """Change the label (name or path) of an entity row.

    Raises:
        UniqueViolation: Another row already uses ``new_name``.
        NotFound: No row has this id.
    """
    column = LABEL_COLUMNS.get(table)
    if column is None:
        raise ValueError(f"Table has no label column: {table}")

    with integrity_errors(table, **{column: new_name}):
        cursor = conn.execute(
            f"UPDATE {table} SET {column} = ? WHERE id = ?",  # noqa: S608
            (new_name, row_id),
        )
    if cursor.rowcount == 0:
        raise NotFound(f"No row {row_id} in {table}", {"table": table, "id": row_id})


def get_label(conn: sqlite3.Connection, table: str, row_id: int) -> Optional[str]:
    """Return the name or path of an entity row, or None if absent."""
    column = LABEL_COLUMNS.get(table)
    if column is None:
        raise ValueError(f"Table has no label column: {table}")

    cursor = conn.execute(
        f"SELECT {column} FROM {table} WHERE id = ?",  # noqa: S608
        (row_id,),
    )
    row = cursor.fetchone()
    return row[0] if row else None


def list_rows(conn: sqlite3.Connection, table: str) -> list[tuple[int, str]]:
    """Return ``(id, label)`` for every row of an entity table, ordered by id."""
    column = LABEL_COLUMNS.get(table)
    if column is None:
        raise ValueError(f"Table has no label column: {table}")

    cursor = conn.execute(f"SELECT id, {column} FROM {table} ORDER BY id")  # noqa: S608
    return [(row[0], row[1]) for row in cursor.fetchall()]
