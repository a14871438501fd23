"""Command-line interface for tagdb."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..config import get_config
from .admin import admin
from .item import item
from .namespace import namespace
from .query import query
from .tag import tag
from .utils import setup_logging


@click.group()
@click.version_option()
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False, path_type=Path),
    envvar="TAGDB_PATH",
    help="Database file (default from config.yaml)",
)
@click.option("--verbose", "-v", is_flag=True, help="Log debug output to stderr")
def main(db_path: Optional[Path], verbose: bool):
    """tagdb - Hierarchical tags for image collections.

    Commands are organized into five groups:

    \b
      admin      Database maintenance
      item       Add, move, tag and untag items
      namespace  Group tags under namespaces
      query      Look up tags and items
      tag        Create tags and build the tag hierarchy
    """
    config = get_config()
    if db_path is not None:
        config.db_path = db_path.expanduser()
    setup_logging("DEBUG" if verbose else config.log_level)


# Register command groups
main.add_command(admin)
main.add_command(item)
main.add_command(namespace)
main.add_command(query)
main.add_command(tag)


if __name__ == "__main__":
    main()
