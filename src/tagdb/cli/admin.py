"""Admin CLI commands for database maintenance."""

from __future__ import annotations

import click

from .. import core
from ..config import get_config
from ..db import init_db
from .display import echo_rows


@click.group()
def admin():
    """Database maintenance commands."""
    pass


@admin.command()
def init():
    """Initialize the database."""
    config = get_config()
    init_db(config)
    click.echo(f"Initialized tagdb database at {config.db_path}")


@admin.command()
@click.confirmation_option(prompt="Delete every item, tag and namespace?")
def recreate():
    """Delete all data and start with an empty database."""
    config = get_config()
    core.delete_all(config)
    click.echo(f"Recreated empty database at {config.db_path}")


@admin.command()
@click.option(
    "--kind",
    type=click.Choice(["tags", "namespaces", "items"]),
    default="tags",
    help="What to scan for (default: tags)",
)
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def orphans(kind: str, show_ids: bool, json_output: bool):
    """List tags, namespaces or items nothing refers to.

    \b
      tags        tags assigned to no item
      namespaces  namespaces holding no tag
      items       items with no tags
    """
    if kind == "tags":
        rows = core.orphan_tags()
    elif kind == "namespaces":
        rows = core.orphan_namespaces()
    else:
        rows = core.orphan_items()

    echo_rows(rows, f"No orphaned {kind}.", show_ids, json_output)
