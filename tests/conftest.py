"""Centralized pytest fixtures and configuration.

This module provides shared fixtures for all tests, including:
- Database configuration with isolated temp directories
- Pre-populated database fixtures for hierarchy and query tests
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from tagdb.config import Config
from tagdb.db import init_db

if TYPE_CHECKING:
    from collections.abc import Generator


# -----------------------------------------------------------------------------
# Database Configuration Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files.

    The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config(temp_dir: Path) -> Generator[Config, None, None]:
    """Create a temporary configuration for testing.

    This is the standard fixture for tests that need database access.
    """
    config = Config(db_path=temp_dir / "test.db")
    init_db(config)
    yield config


# -----------------------------------------------------------------------------
# Pre-populated Database Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def tag_chain(temp_config: Config) -> dict[str, int]:
    """Create tags a, b, c with a parent of b and b parent of c.

    Returns a dict mapping tag names to tag IDs.
    """
    from tagdb import core

    tags = {name: core.create_tag(name, config=temp_config) for name in ("a", "b", "c")}
    core.add_hierarchy_edge(tags["a"], tags["b"], config=temp_config)
    core.add_hierarchy_edge(tags["b"], tags["c"], config=temp_config)
    return tags


@pytest.fixture
def tagged_items(temp_config: Config) -> dict[str, int]:
    """Create items i1 (tags a, b) and i2 (tag a).

    Returns a dict mapping item names to item IDs.
    """
    from tagdb import core

    items = {
        "i1": core.create_item("i1.jpg", config=temp_config),
        "i2": core.create_item("i2.jpg", config=temp_config),
    }
    core.assign(items["i1"], "a", create_if_missing=True, config=temp_config)
    core.assign(items["i1"], "b", create_if_missing=True, config=temp_config)
    core.assign(items["i2"], "a", config=temp_config)
    return items
