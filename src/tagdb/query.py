"""Tag queries: whitespace-separated tag names compiled into item lookups."""

from __future__ import annotations

import logging
import sqlite3
from dataclasses import dataclass, field

from . import store

logger = logging.getLogger(__name__)


@dataclass
class CompiledQuery:
    """A tag query resolved against the tag table."""
    sql: str
    params: tuple = ()
    tag_ids: list[int] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)  # Tokens naming no tag


def tokenize(query_text: str) -> list[str]:
    """Split query text on whitespace, dropping empty tokens."""
    return query_text.split()


def compile_query(conn: sqlite3.Connection, query_text: str) -> CompiledQuery:
    """Resolve each token to a tag and build an intersection query.

    Every resolved tag adds one join against ``item_tags`` on the item id, so
    an item only survives if it holds all of them. Tokens that name no tag
    are skipped. With no resolved tokens the query has no joins and returns
    every item.
    """
    joins = []
    tag_ids: list[int] = []
    skipped: list[str] = []

    for token in tokenize(query_text):
        tag_id = store.find_id(conn, "tags", name=token)
        if tag_id is None:
            skipped.append(token)
            continue
        if tag_id in tag_ids:
            continue
        n = len(tag_ids)
        joins.append(f"JOIN item_tags t{n} ON i.id = t{n}.item_id AND t{n}.tag_id = ?")
        tag_ids.append(tag_id)

    if skipped:
        logger.debug("Query skipped unknown tags: %s", ", ".join(skipped))

    sql = "\n".join(["SELECT i.id, i.path FROM items i", *joins, "ORDER BY i.id"])
    return CompiledQuery(sql=sql, params=tuple(tag_ids), tag_ids=tag_ids, skipped=skipped)


def compile_and_run(conn: sqlite3.Connection, query_text: str) -> list[store.Item]:
    """Return every item holding all of the tags named in ``query_text``."""
    compiled = compile_query(conn, query_text)
    cursor = conn.execute(compiled.sql, compiled.params)
    return [store.Item(row["id"], row["path"]) for row in cursor.fetchall()]


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_tags(conn: sqlite3.Connection, substring: str) -> list[store.Tag]:
    """Tags whose name contains ``substring``.

    Matching uses SQLite's LIKE, so it ignores ASCII case. An empty
    substring matches nothing.
    """
    if not substring:
        return []

    cursor = conn.execute(
        "SELECT id, name FROM tags WHERE name LIKE ? ESCAPE '\\' ORDER BY id",
        (f"%{_escape_like(substring)}%",),
    )
    return [store.Tag(row["id"], row["name"]) for row in cursor.fetchall()]
