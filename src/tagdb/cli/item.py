"""Item CLI commands."""

from __future__ import annotations

from typing import Optional

import click

from .. import core
from ..config import get_config
from ..errors import TagDBError
from .utils import fail, parse_tags, require_item, require_tag


@click.group()
def item():
    """Add, move, tag and untag items."""
    pass


@item.command("add")
@click.argument("path")
@click.option("--tags", "-t", help="Tags to assign (comma-separated)")
def add(path: str, tags: Optional[str]):
    """Add the item at PATH.

    If any of the tags is rejected, the item is not added.
    """
    try:
        core.create_item(
            path,
            tags=parse_tags(tags),
            create_if_missing=get_config().create_missing_tags,
        )
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Added item: {path}")


@item.command("remove")
@click.argument("path")
def remove(path: str):
    """Remove the item at PATH and its tags."""
    try:
        core.delete_item_by_path(path)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Removed item: {path}")


@item.command("move")
@click.argument("path")
@click.argument("new_path")
def move(path: str, new_path: str):
    """Point the item at PATH to NEW_PATH, keeping its tags."""
    found = require_item(path)
    try:
        core.update_item_path(found.id, new_path)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Moved item: {path} -> {new_path}")


@item.command("tag")
@click.argument("path")
@click.argument("tags")
@click.option(
    "--create/--no-create",
    default=None,
    help="Create tags that don't exist (default from config)",
)
def tag_item(path: str, tags: str, create: Optional[bool]):
    """Assign TAGS (comma-separated) to the item at PATH.

    Parent tags of each tag are assigned too. If any tag is rejected, none
    is assigned.
    """
    if create is None:
        create = get_config().create_missing_tags

    found = require_item(path)
    names = parse_tags(tags)
    try:
        core.assign_tags(found.id, names, create_if_missing=create)
    except TagDBError as e:
        fail(str(e))
    for name in names:
        click.echo(f"Tagged {path}: {name}")


@item.command("untag")
@click.argument("path")
@click.argument("tag_name")
def untag_item(path: str, tag_name: str):
    """Remove TAG_NAME from the item at PATH.

    Parent tags assigned along with it are kept.
    """
    found = require_item(path)
    found_tag = require_tag(tag_name)
    try:
        core.unassign(found_tag.id, found.id)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Untagged {path}: {tag_name}")
