"""Database operations for tagdb."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Optional

from .config import Config, get_config
from .schema import SCHEMA_SQL, SCHEMA_VERSION

logger = logging.getLogger(__name__)


def _get_connection(db_path: Path) -> sqlite3.Connection:
    """Create a database connection with foreign keys enforced."""
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    # Enable WAL mode for better concurrency
    conn.execute("PRAGMA journal_mode=WAL")
    # Cascading deletes depend on this
    conn.execute("PRAGMA foreign_keys=ON")
    return conn


@contextmanager
def get_db(config: Optional[Config] = None) -> Generator[sqlite3.Connection, None, None]:
    """Get a database connection as a context manager."""
    if config is None:
        config = get_config()

    conn = _get_connection(config.db_path)
    try:
        yield conn
    finally:
        conn.close()


@contextmanager
def transaction(conn: sqlite3.Connection) -> Generator[sqlite3.Connection, None, None]:
    """Run a block as one write transaction.

    ``BEGIN IMMEDIATE`` takes the database write lock before the first read,
    so a read-then-write sequence (cycle check, ancestor propagation) cannot
    interleave with another writer. Commits on success, rolls back on any
    exception. Nested use joins the outer transaction.
    """
    if conn.in_transaction:
        yield conn
        return

    conn.execute("BEGIN IMMEDIATE")
    try:
        yield conn
    except BaseException:
        conn.rollback()
        raise
    else:
        conn.commit()


def init_db(config: Optional[Config] = None) -> None:
    """Initialize the database with the schema.

    Args:
        config: Configuration to use. Defaults to global config.
    """
    if config is None:
        config = get_config()

    # Ensure directory exists
    config.db_path.parent.mkdir(parents=True, exist_ok=True)

    with get_db(config) as conn:
        # Check if already initialized
        cursor = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name='meta'"
        )
        is_new = cursor.fetchone() is None

        # Create schema
        conn.executescript(SCHEMA_SQL)

        if is_new:
            logger.debug("Created schema v%d at %s", SCHEMA_VERSION, config.db_path)
            conn.execute(
                "INSERT INTO meta (key, value) VALUES ('schema_version', ?)",
                (str(SCHEMA_VERSION),),
            )

        conn.commit()


def recreate_db(config: Optional[Config] = None) -> None:
    """Delete the database file and create an empty schema in its place."""
    if config is None:
        config = get_config()

    for suffix in ("", "-wal", "-shm"):
        path = Path(f"{config.db_path}{suffix}")
        if path.exists():
            path.unlink()

    logger.info("Recreating database at %s", config.db_path)
    init_db(config)


def get_schema_version(config: Optional[Config] = None) -> Optional[int]:
    """Get the current schema version from the database."""
    if config is None:
        config = get_config()

    if not config.db_path.exists():
        return None

    with get_db(config) as conn:
        cursor = conn.execute(
            "SELECT value FROM meta WHERE key = 'schema_version'"
        )
        row = cursor.fetchone()
        return int(row[0]) if row else None
