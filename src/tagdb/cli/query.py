"""Query CLI commands for looking up tags and items."""

from __future__ import annotations

import click

from .. import core
from .display import echo_rows
from .utils import require_item, require_tag


@click.group()
def query():
    """Look up tags and items."""
    pass


@query.command("tags")
@click.argument("path")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def tags(path: str, show_ids: bool, json_output: bool):
    """List the tags of the item at PATH."""
    found = require_item(path)
    echo_rows(core.tags_of_item(found.id), "No tags.", show_ids, json_output)


@query.command("items")
@click.argument("filter_text", metavar="FILTER")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def items(filter_text: str, show_ids: bool, json_output: bool):
    """List items holding every tag in FILTER.

    FILTER is a space-separated list of exact tag names. Names that match
    no tag are ignored.

    \b
    Examples:
      tagdb query items "cat outdoor"
    """
    echo_rows(core.compile_and_run(filter_text), "No matching items.", show_ids, json_output)


@query.command("search")
@click.argument("substring")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def search(substring: str, show_ids: bool, json_output: bool):
    """List tags whose name contains SUBSTRING."""
    echo_rows(core.search_tags(substring), "No matching tags.", show_ids, json_output)


def _echo_related(tag_ids: set[int], show_ids: bool, json_output: bool) -> None:
    rows = []
    for tag_id in sorted(tag_ids):
        found = core.get_tag(tag_id)
        if found is not None:
            rows.append(found)
    echo_rows(rows, "None.", show_ids, json_output)


@query.command("ancestors")
@click.argument("tag_name")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def ancestors(tag_name: str, show_ids: bool, json_output: bool):
    """List every tag implied by TAG_NAME."""
    found = require_tag(tag_name)
    _echo_related(core.ancestors(found.id), show_ids, json_output)


@query.command("descendants")
@click.argument("tag_name")
@click.option("--ids", "show_ids", is_flag=True, help="Show row IDs")
@click.option("--json", "json_output", is_flag=True, help="Machine-readable JSON output")
def descendants(tag_name: str, show_ids: bool, json_output: bool):
    """List every tag that implies TAG_NAME."""
    found = require_tag(tag_name)
    _echo_related(core.descendants(found.id), show_ids, json_output)
