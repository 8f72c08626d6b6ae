"""Tests for Java type name resolution."""

import pytest

from umlscope.parsers.type_resolver import (
    ProjectTypeIndex,
    ResolutionError,
    TypeResolver,
    normalize_type_name,
)


@pytest.fixture
def index():
    """Project types across three packages, with one duplicated simple name."""
    project_index = ProjectTypeIndex()
    project_index.add_all([
        "com.app.service.OrderService",
        "com.app.service.Shared",
        "com.app.model.Order",
        "com.app.model.Shared",
        "com.app.model.Order.Line",
        "com.app.repo.OrderRepository",
    ])
    return project_index


class TestNormalizeTypeName:
    """Tests for normalize_type_name."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("Order", "Order"),
            ("List<Order>", "List"),
            ("Map<String, List<Order>>", "Map"),
            ("Order[]", "Order"),
            ("String...", "String"),
            ("@NonNull Order", "Order"),
            ("java.util.List<com.app.model.Order>", "java.util.List"),
            ("", ""),
        ],
    )
    def test_normalize(self, raw, expected):
        """Test decorations around the type name are removed."""
        assert normalize_type_name(raw) == expected


class TestProjectTypeIndex:
    """Tests for ProjectTypeIndex."""

    def test_candidates_by_simple_name(self, index):
        """Test lookup by simple name returns every match."""
        assert sorted(index.candidates("Shared")) == [
            "com.app.model.Shared",
            "com.app.service.Shared",
        ]
        assert index.candidates("Missing") == []

    def test_add_is_idempotent(self):
        """Test adding the same name twice keeps one entry."""
        project_index = ProjectTypeIndex()
        project_index.add("com.app.A")
        project_index.add("com.app.A")

        assert len(project_index) == 1
        assert "com.app.A" in project_index


class TestTypeResolver:
    """Tests for TypeResolver.resolve."""

    def test_explicit_import(self, index):
        """Test single-type imports win over everything else."""
        resolver = TypeResolver(index, "com.app.service", imports=["com.app.model.Shared"])

        assert resolver.resolve("Shared") == "com.app.model.Shared"

    def test_same_package(self, index):
        """Test types in the unit's own package resolve without imports."""
        resolver = TypeResolver(index, "com.app.service")

        assert resolver.resolve("Shared") == "com.app.service.Shared"

    def test_wildcard_import(self, index):
        """Test on-demand imports match project types."""
        resolver = TypeResolver(index, "com.app.web", wildcard_imports=["com.app.model"])

        assert resolver.resolve("Shared") == "com.app.model.Shared"

    def test_java_lang(self, index):
        """Test implicit java.lang types."""
        resolver = TypeResolver(index, "com.app.web")

        assert resolver.resolve("String") == "java.lang.String"
        assert resolver.resolve("System") == "java.lang.System"

    def test_unique_project_type(self, index):
        """Test a unique simple name resolves without an import."""
        resolver = TypeResolver(index, "com.app.web")

        assert resolver.resolve("OrderRepository") == "com.app.repo.OrderRepository"

    def test_ambiguous_name_raises(self, index):
        """Test several candidates without an import is an error."""
        resolver = TypeResolver(index, "com.app.web")

        with pytest.raises(ResolutionError, match="Ambiguous"):
            resolver.resolve("Shared")

    def test_var_raises(self, index):
        """Test local type inference cannot be resolved."""
        with pytest.raises(ResolutionError):
            TypeResolver(index).resolve("var")

    @pytest.mark.parametrize("raw", ["int", "void", "boolean", "", None])
    def test_primitives_and_empty_resolve_to_none(self, index, raw):
        """Test primitives have no fully-qualified name."""
        assert TypeResolver(index).resolve(raw) is None

    def test_unknown_name_resolves_to_none(self, index):
        """Test names not in the project and not imported are unknown."""
        assert TypeResolver(index, "com.app.web").resolve("Mystery") is None

    def test_generic_resolves_raw_type(self, index):
        """Test List<Order> resolves as its raw type."""
        resolver = TypeResolver(index, "com.app.web", imports=["java.util.List"])

        assert resolver.resolve("List<Order>") == "java.util.List"

    def test_qualified_name_kept(self, index):
        """Test already-qualified names pass through."""
        resolver = TypeResolver(index, "com.app.web")

        assert resolver.resolve("com.app.model.Order") == "com.app.model.Order"
        assert resolver.resolve("java.util.Map") == "java.util.Map"

    def test_nested_type_through_outer(self, index):
        """Test Outer.Inner resolves through the outer type."""
        resolver = TypeResolver(index, "com.app.web", imports=["com.app.model.Order"])

        assert resolver.resolve("Order.Line") == "com.app.model.Order.Line"

    def test_qualify(self, index):
        """Test qualify honors the default package."""
        assert TypeResolver(index, "com.app").qualify("A") == "com.app.A"
        assert TypeResolver(index, "").qualify("A") == "A"
