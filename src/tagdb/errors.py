"""
Exceptions for tagdb.

Every condition a user can trigger (duplicate names, missing rows, rejected
hierarchy edges) is raised as a subclass of TagDBError so callers can report
it and carry on. Anything else coming out of sqlite3 is an I/O or programming
fault and is left to propagate.
"""

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional


class TagDBError(Exception):
    """Base exception for all recoverable tagdb errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self):
        return self.message


class UniqueViolation(TagDBError):
    """A name, path or relation pair already exists."""


class NotFound(TagDBError):
    """The referenced tag, item, namespace or relation row does not exist."""


class UnknownTag(NotFound):
    """A tag name did not resolve and creation was not requested."""

    def __init__(self, name: str):
        super().__init__(f"Tag does not exist: {name}", {"name": name})
        self.name = name


# =============================================================================
# Hierarchy Errors
# =============================================================================

class HierarchyError(TagDBError):
    """Base exception for rejected hierarchy edges."""

    def __init__(self, message: str, parent_id: int, child_id: int):
        super().__init__(message, {"parent_id": parent_id, "child_id": child_id})
        self.parent_id = parent_id
        self.child_id = child_id


class DuplicateEdge(HierarchyError, UniqueViolation):
    """The parent/child edge is already present."""

    def __init__(self, parent_id: int, child_id: int):
        super().__init__(
            f"Tag {parent_id} is already a parent of tag {child_id}",
            parent_id,
            child_id,
        )


class WouldCreateCycle(HierarchyError):
    """The edge would make a tag its own ancestor."""

    def __init__(self, parent_id: int, child_id: int):
        super().__init__(
            f"Making tag {parent_id} a parent of tag {child_id} would create a cycle",
            parent_id,
            child_id,
        )


@contextmanager
def integrity_errors(table: str, **values: Any) -> Generator[None, None, None]:
    """Translate sqlite3 constraint failures into typed errors.

    UNIQUE failures become UniqueViolation, FOREIGN KEY failures become
    NotFound (the referenced row is missing).
    """
    try:
        yield
    except sqlite3.IntegrityError as e:
        message = str(e)
        if "UNIQUE constraint failed" in message:
            raise UniqueViolation(
                f"Already exists in {table}: {_describe(values)}",
                {"table": table, **values},
            ) from e
        if "FOREIGN KEY constraint failed" in message:
            raise NotFound(
                f"Referenced row missing for {table}: {_describe(values)}",
                {"table": table, **values},
            ) from e
        raise


def _describe(values: Dict[str, Any]) -> str:
    return ", ".join(f"{key}={value!r}" for key, value in values.items())
