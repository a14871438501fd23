"""Tag CLI commands: creation, renaming and the tag hierarchy."""

from __future__ import annotations

import click

from .. import core
from ..errors import DuplicateEdge, TagDBError, WouldCreateCycle
from .display import echo_rows
from .utils import fail, require_tag


@click.group()
def tag():
    """Create tags and build the tag hierarchy."""
    pass


@tag.command("create")
@click.argument("names", nargs=-1, required=True)
def create(names: tuple[str, ...]):
    """Create one or more tags."""
    ids = core.create_tags(list(names))
    for name, tag_id in zip(names, ids):
        if tag_id is None:
            click.echo(f"Tag already exists: {name}", err=True)
        else:
            click.echo(f"Created tag: {name}")


@tag.command("delete")
@click.argument("names", nargs=-1, required=True)
def delete(names: tuple[str, ...]):
    """Delete tags, their hierarchy edges and their assignments."""
    names = tuple(dict.fromkeys(names))
    found = [require_tag(name) for name in names]
    try:
        core.delete_tags([t.id for t in found])
    except TagDBError as e:
        fail(str(e))
    for name in names:
        click.echo(f"Deleted tag: {name}")


@tag.command("rename")
@click.argument("name")
@click.argument("new_name")
def rename(name: str, new_name: str):
    """Rename a tag."""
    found = require_tag(name)
    try:
        core.rename_tag(found.id, new_name)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Renamed tag: {name} -> {new_name}")


@tag.command("list")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def list_tags(show_ids: bool, json_output: bool):
    """List all tags."""
    echo_rows(core.list_tags(), "No tags.", show_ids, json_output)


@tag.command("parent")
@click.argument("parent_name")
@click.argument("child_name")
def parent(parent_name: str, child_name: str):
    """Make PARENT_NAME a parent of CHILD_NAME.

    Items tagged with CHILD_NAME from now on also get PARENT_NAME.
    """
    parent_tag = require_tag(parent_name)
    child_tag = require_tag(child_name)
    try:
        core.add_hierarchy_edge(parent_tag.id, child_tag.id)
    except DuplicateEdge:
        fail(f"'{parent_name}' is already a parent of '{child_name}'")
    except WouldCreateCycle:
        fail(f"'{child_name}' is already an ancestor of '{parent_name}'; this would create a cycle")
    except TagDBError as e:
        fail(str(e))
    click.echo(f"'{parent_name}' is now a parent of '{child_name}'")


@tag.command("unparent")
@click.argument("parent_name")
@click.argument("child_name")
def unparent(parent_name: str, child_name: str):
    """Remove the edge between PARENT_NAME and CHILD_NAME.

    Items already holding PARENT_NAME through this edge keep it.
    """
    parent_tag = require_tag(parent_name)
    child_tag = require_tag(child_name)
    try:
        core.remove_hierarchy_edge(parent_tag.id, child_tag.id)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"'{parent_name}' is no longer a parent of '{child_name}'")
