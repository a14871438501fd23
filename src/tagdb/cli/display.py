"""CLI display and formatting functions."""

from __future__ import annotations

import json
from typing import Iterable

import click


def format_row(row_id: int, label: str, show_ids: bool = False) -> str:
    """Format an (id, label) row for display."""
    if show_ids:
        return f"[{row_id}] {label}"
    return label


def echo_rows(
    rows: Iterable[tuple[int, str]],
    empty_message: str,
    show_ids: bool = False,
    json_output: bool = False,
) -> None:
    """Print rows one per line, or as a JSON list of {id, name} objects."""
    rows = list(rows)

    if json_output:
        click.echo(json.dumps([{"id": r[0], "name": r[1]} for r in rows], indent=2))
        return

    if not rows:
        click.echo(empty_message)
        return

    for row_id, label in rows:
        click.echo(format_row(row_id, label, show_ids))
