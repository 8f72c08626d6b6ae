"""Tests for the entity graph."""

import pytest

from umlscope.models import CodeEntity, MethodEntity
from umlscope.services.graph import EntityGraph


class TestEntityGraph:
    """Tests for EntityGraph assembly and lookup."""

    def test_keeps_insertion_order(self):
        """Test iteration follows insertion order."""
        graph = EntityGraph([CodeEntity("com.app.B"), CodeEntity("com.app.A")])

        assert [e.name for e in graph] == ["com.app.B", "com.app.A"]
        assert len(graph) == 2

    def test_duplicate_name_keeps_first(self):
        """Test same-named entities are deduplicated, first wins."""
        first = CodeEntity("com.app.A").add_method(MethodEntity("first"))
        second = CodeEntity("com.app.A").add_method(MethodEntity("second"))
        graph = EntityGraph()

        assert graph.add(first)
        assert not graph.add(second)
        assert len(graph) == 1
        assert graph.get("com.app.A") is first

    def test_lookup(self):
        """Test get and membership by name."""
        graph = EntityGraph([CodeEntity("com.app.A")])

        assert "com.app.A" in graph
        assert "com.app.Missing" not in graph
        assert graph.get("com.app.Missing") is None

    def test_index_is_read_only(self):
        """Test the precomputed index cannot be modified."""
        graph = EntityGraph([CodeEntity("com.app.A")])
        index = graph.index()

        assert index["com.app.A"].name == "com.app.A"
        with pytest.raises(TypeError):
            index["com.app.B"] = CodeEntity("com.app.B")

    def test_index_is_computed_once(self):
        """Test repeated index calls return the same mapping."""
        graph = EntityGraph([CodeEntity("com.app.A")])

        assert graph.index() is graph.index()

    def test_add_after_index_fails(self):
        """Test the graph is frozen once indexed."""
        graph = EntityGraph([CodeEntity("com.app.A")])
        graph.index()

        with pytest.raises(RuntimeError):
            graph.add(CodeEntity("com.app.B"))

    def test_filter_by_prefix(self):
        """Test package filtering."""
        graph = EntityGraph([CodeEntity("com.app.A"), CodeEntity("org.lib.B")])

        assert [e.name for e in graph.filter_by_prefix("com.app")] == ["com.app.A"]
        assert len(graph.filter_by_prefix("")) == 2
        assert len(graph.filter_by_prefix(None)) == 2
