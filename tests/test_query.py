"""Tests for tag queries and tag search."""

from __future__ import annotations

from tagdb import core
from tagdb.db import get_db
from tagdb.query import compile_query, tokenize


class TestTokenize:
    """Test query tokenization."""

    def test_whitespace(self):
        """Any run of whitespace separates tokens."""
        assert tokenize("  a \t b\nc  ") == ["a", "b", "c"]

    def test_empty(self):
        """Blank queries have no tokens."""
        assert tokenize("   ") == []


class TestCompileAndRun:
    """Test running tag queries."""

    def test_intersection(self, temp_config, tagged_items):
        """All tokens must match."""
        result = core.compile_and_run("a b", config=temp_config)
        assert result == [(tagged_items["i1"], "i1.jpg")]

    def test_single_tag(self, temp_config, tagged_items):
        """One token returns every item holding it."""
        result = core.compile_and_run("a", config=temp_config)
        assert [i.id for i in result] == [tagged_items["i1"], tagged_items["i2"]]

    def test_unknown_token_skipped(self, temp_config, tagged_items):
        """Tokens naming no tag are ignored."""
        assert core.compile_and_run("a nonexistent", config=temp_config) == core.compile_and_run(
            "a", config=temp_config
        )

    def test_no_resolved_tokens_returns_all(self, temp_config, tagged_items):
        """With nothing resolved, every item matches."""
        core.create_item("untagged.jpg", config=temp_config)
        assert len(core.compile_and_run("nothing here", config=temp_config)) == 3
        assert len(core.compile_and_run("", config=temp_config)) == 3

    def test_repeated_token(self, temp_config, tagged_items):
        """Repeating a tag does not change the result."""
        assert core.compile_and_run("b b", config=temp_config) == [(tagged_items["i1"], "i1.jpg")]

    def test_no_match(self, temp_config, tagged_items):
        """An existing tag nobody holds yields no items."""
        core.create_tag("lonely", config=temp_config)
        assert core.compile_and_run("a lonely", config=temp_config) == []

    def test_implied_tags_match(self, temp_config, tag_chain):
        """Items match on tags propagated from the hierarchy."""
        item_id = core.create_item("x.jpg", config=temp_config)
        core.assign(item_id, "c", config=temp_config)
        assert core.compile_and_run("a", config=temp_config) == [(item_id, "x.jpg")]

    def test_quotes_are_literal(self, temp_config):
        """Tag names are bound as parameters."""
        item_id = core.create_item("x.jpg", config=temp_config)
        core.assign(item_id, "it's", create_if_missing=True, config=temp_config)
        core.create_item("y.jpg", config=temp_config)

        assert core.compile_and_run("it's", config=temp_config) == [(item_id, "x.jpg")]

    def test_compiled_query(self, temp_config, tagged_items):
        """The compiled query records resolved and skipped tokens."""
        a = core.get_tag_by_name("a", config=temp_config).id
        with get_db(temp_config) as conn:
            compiled = compile_query(conn, "a missing")

        assert compiled.tag_ids == [a]
        assert compiled.skipped == ["missing"]
        assert compiled.params == (a,)
        assert compiled.sql.count("JOIN item_tags") == 1


class TestSearchTags:
    """Test substring search over tag names."""

    def test_substring(self, temp_config):
        """Tags containing the substring are returned."""
        ids = {n: core.create_tag(n, config=temp_config) for n in ("cat", "concat", "dog")}
        result = core.search_tags("cat", config=temp_config)
        assert result == [(ids["cat"], "cat"), (ids["concat"], "concat")]

    def test_empty_substring(self, temp_config):
        """An empty search returns nothing."""
        core.create_tag("cat", config=temp_config)
        assert core.search_tags("", config=temp_config) == []

    def test_wildcards_are_literal(self, temp_config):
        """LIKE wildcards in the search term match themselves."""
        core.create_tag("abc", config=temp_config)
        literal = core.create_tag("a_c", config=temp_config)
        core.create_tag("100", config=temp_config)

        assert core.search_tags("_", config=temp_config) == [(literal, "a_c")]
        assert core.search_tags("%", config=temp_config) == []
