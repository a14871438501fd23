"""Tests for orphan scans."""

from __future__ import annotations

from tagdb import core


class TestOrphans:
    """Test detection of unreferenced tags, namespaces and items."""

    def test_fresh_tag_is_orphan(self, temp_config):
        """A tag with no assignments is an orphan until it is assigned."""
        tag_id = core.create_tag("lonely", config=temp_config)
        assert core.orphan_tags(config=temp_config) == [(tag_id, "lonely")]

        item_id = core.create_item("x.jpg", config=temp_config)
        core.assign(item_id, "lonely", config=temp_config)

        assert core.orphan_tags(config=temp_config) == []

    def test_multiple_orphan_tags(self, temp_config):
        """All orphaned tags are listed in ID order."""
        t1 = core.create_tag("tag1", config=temp_config)
        t2 = core.create_tag("tag2", config=temp_config)
        assert core.orphan_tags(config=temp_config) == [(t1, "tag1"), (t2, "tag2")]

    def test_hierarchy_does_not_count(self, temp_config, tag_chain):
        """Tags linked only by hierarchy edges are still orphans."""
        assert len(core.orphan_tags(config=temp_config)) == 3

    def test_item_orphans(self, temp_config, tagged_items):
        """Items without tags are orphans."""
        bare = core.create_item("bare.jpg", config=temp_config)
        assert core.orphan_items(config=temp_config) == [(bare, "bare.jpg")]

    def test_item_orphan_after_unassign(self, temp_config):
        """Removing an item's last tag makes it an orphan."""
        item_id = core.create_item("x.jpg", config=temp_config)
        tag_id = core.assign(item_id, "t", create_if_missing=True, config=temp_config)
        assert core.orphan_items(config=temp_config) == []

        core.unassign(tag_id, item_id, config=temp_config)
        assert core.orphan_items(config=temp_config) == [(item_id, "x.jpg")]

    def test_namespace_orphans(self, temp_config):
        """Namespaces without tags are orphans."""
        used = core.create_namespace("used", config=temp_config)
        empty = core.create_namespace("empty", config=temp_config)
        tag_id = core.create_tag("t", config=temp_config)
        core.set_namespace(tag_id, used, config=temp_config)

        assert core.orphan_namespaces(config=temp_config) == [(empty, "empty")]

    def test_scans_are_read_only(self, temp_config, tagged_items):
        """Scanning changes nothing."""
        before = core.list_tags(config=temp_config), core.list_items(config=temp_config)
        core.orphan_tags(config=temp_config)
        core.orphan_items(config=temp_config)
        core.orphan_namespaces(config=temp_config)
        assert (core.list_tags(config=temp_config), core.list_items(config=temp_config)) == before
