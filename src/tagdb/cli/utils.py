"""CLI utility functions."""

from __future__ import annotations

import logging
import sys
from typing import NoReturn, Optional

import click

from .. import core
from ..store import Item, Namespace, Tag


def setup_logging(level: str) -> None:
    """Send log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


def parse_tags(tags: Optional[str]) -> list[str]:
    """Parse comma-separated tags string."""
    if not tags:
        return []
    return [t.strip() for t in tags.split(",") if t.strip()]


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


def require_tag(name: str) -> Tag:
    """Look up a tag by name or exit."""
    found = core.get_tag_by_name(name)
    if found is None:
        fail(f"Tag not found: {name}")
    return found


def require_item(path: str) -> Item:
    """Look up an item by path or exit."""
    found = core.get_item_by_path(path)
    if found is None:
        fail(f"Item not found: {path}")
    return found


def require_namespace(name: str) -> Namespace:
    """Look up a namespace by name or exit."""
    found = core.get_namespace_by_name(name)
    if found is None:
        fail(f"Namespace not found: {name}")
    return found
