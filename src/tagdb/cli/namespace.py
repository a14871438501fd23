"""Namespace CLI commands."""

from __future__ import annotations

import click

from .. import core
from ..errors import TagDBError, UniqueViolation
from .display import echo_rows
from .utils import fail, require_namespace, require_tag


@click.group()
def namespace():
    """Group tags under namespaces."""
    pass


@namespace.command("create")
@click.argument("name")
def create(name: str):
    """Create a namespace."""
    try:
        core.create_namespace(name)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Created namespace: {name}")


@namespace.command("delete")
@click.argument("name")
def delete(name: str):
    """Delete a namespace. Its tags are kept."""
    found = require_namespace(name)
    try:
        core.delete_namespace(found.id)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Deleted namespace: {name}")


@namespace.command("rename")
@click.argument("name")
@click.argument("new_name")
def rename(name: str, new_name: str):
    """Rename a namespace."""
    found = require_namespace(name)
    try:
        core.rename_namespace(found.id, new_name)
    except TagDBError as e:
        fail(str(e))
    click.echo(f"Renamed namespace: {name} -> {new_name}")


@namespace.command("set")
@click.argument("tag_name")
@click.argument("namespace_name")
def set_namespace(tag_name: str, namespace_name: str):
    """Put TAG_NAME into NAMESPACE_NAME.

    A tag can only be in one namespace; clear it first to move it.
    """
    found_tag = require_tag(tag_name)
    found = require_namespace(namespace_name)
    try:
        core.set_namespace(found_tag.id, found.id)
    except UniqueViolation:
        current = core.namespace_of_tag(found_tag.id)
        fail(f"'{tag_name}' is already in namespace '{core.namespace_name(current)}'")
    except TagDBError as e:
        fail(str(e))
    click.echo(f"'{tag_name}' is now in namespace '{namespace_name}'")


@namespace.command("clear")
@click.argument("tag_name")
def clear(tag_name: str):
    """Take TAG_NAME out of its namespace."""
    found_tag = require_tag(tag_name)
    if core.clear_namespace(found_tag.id):
        click.echo(f"Cleared namespace of '{tag_name}'")
    else:
        click.echo(f"'{tag_name}' has no namespace")


@namespace.command("show")
@click.argument("name")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def show(name: str, show_ids: bool, json_output: bool):
    """List the tags in a namespace."""
    found = require_namespace(name)
    echo_rows(core.tags_in_namespace(found.id), "No tags.", show_ids, json_output)
