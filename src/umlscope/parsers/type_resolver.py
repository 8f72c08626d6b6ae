"""
Type Resolver - Simple Names to Fully-Qualified Names.

Resolves type names as written in one Java compilation unit against the
unit's package and imports and an index of every type declared in the
project.

Resolution order for a simple name:
    1. Explicit single-type import (``import com.app.Order;``)
    2. Type declared in the same package
    3. On-demand import (``import com.app.model.*;``) of a project type
    4. Well-known ``java.lang`` type
    5. The only project type with that simple name

Generic arguments, array brackets and varargs are stripped first, so
``List<Order>`` resolves as ``List`` and ``Order[]`` as ``Order``.
Primitive types and unknown names resolve to None. A name that matches
several project types, or a ``var`` declaration, raises ResolutionError.
"""

import re
from collections import defaultdict
from collections.abc import Iterable
from typing import Optional


PRIMITIVE_TYPES = frozenset({
    "void", "boolean", "byte", "char", "short", "int", "long", "float", "double",
})

JAVA_LANG_TYPES = frozenset({
    "Object", "String", "StringBuilder", "StringBuffer", "CharSequence",
    "Boolean", "Byte", "Character", "Short", "Integer", "Long", "Float", "Double",
    "Number", "Math", "System", "Thread", "Runnable", "Iterable", "Comparable",
    "Class", "Enum", "Record", "Void", "AutoCloseable", "Cloneable",
    "Exception", "RuntimeException", "Error", "Throwable",
    "IllegalArgumentException", "IllegalStateException", "NullPointerException",
    "UnsupportedOperationException", "IndexOutOfBoundsException",
    "Override", "Deprecated", "FunctionalInterface", "SuppressWarnings",
})

_GENERIC_ARGUMENTS = re.compile(r"<[^<>]*>")
_ANNOTATION = re.compile(r"@[\w.]+(\([^)]*\))?\s*")


class ResolutionError(Exception):
    """Raised when a type name cannot be resolved unambiguously."""


def normalize_type_name(raw: str) -> str:
    """
    Strip annotations, generic arguments, array brackets and varargs.

    >>> normalize_type_name("Map<String, List<Order>>[]")
    'Map'
    """
    name = _ANNOTATION.sub("", raw or "")
    previous = None
    while previous != name:
        previous = name
        name = _GENERIC_ARGUMENTS.sub("", name)
    name = name.replace("[]", "").replace("...", "")
    return "".join(name.split())


class ProjectTypeIndex:
    """Every type declared in the analyzed project, by FQN and simple name."""

    def __init__(self):
        self._qualified: set[str] = set()
        self._by_simple_name: dict[str, list[str]] = defaultdict(list)

    def add(self, qualified_name: str) -> None:
        if qualified_name in self._qualified:
            return
        self._qualified.add(qualified_name)
        self._by_simple_name[qualified_name.rsplit(".", 1)[-1]].append(qualified_name)

    def add_all(self, qualified_names: Iterable[str]) -> None:
        for name in qualified_names:
            self.add(name)

    def candidates(self, simple_name: str) -> list[str]:
        return list(self._by_simple_name.get(simple_name, ()))

    def __contains__(self, qualified_name: object) -> bool:
        return qualified_name in self._qualified

    def __len__(self) -> int:
        return len(self._qualified)


class TypeResolver:
    """
    Resolves type names for one compilation unit.

    Args:
        index: Types declared anywhere in the project
        package: Package of the compilation unit ("" for the default package)
        imports: Single-type imports (fully-qualified)
        wildcard_imports: Packages or types imported on demand
    """

    def __init__(
        self,
        index: ProjectTypeIndex,
        package: str = "",
        imports: Iterable[str] = (),
        wildcard_imports: Iterable[str] = (),
    ):
        self.index = index
        self.package = package
        self.wildcard_imports = list(wildcard_imports)
        self._imports = {name.rsplit(".", 1)[-1]: name for name in imports}

    def qualify(self, simple_name: str) -> str:
        """FQN for a type declared in this unit's package."""
        return f"{self.package}.{simple_name}" if self.package else simple_name

    def resolve(self, raw: Optional[str]) -> Optional[str]:
        """
        Resolve a type name to its fully-qualified form.

        Returns:
            The fully-qualified name, or None for primitives and unknown names

        Raises:
            ResolutionError: If the name is ``var`` or matches several
                             project types
        """
        name = normalize_type_name(raw or "")
        if not name or name in PRIMITIVE_TYPES:
            return None
        if name == "var":
            raise ResolutionError("Cannot infer the declared type of 'var'")

        if "." in name:
            return self._resolve_qualified(name)
        return self._resolve_simple(name)

    def _resolve_qualified(self, name: str) -> Optional[str]:
        if name in self.index:
            return name
        # Outer.Inner where Outer is itself imported or local
        head, _, tail = name.partition(".")
        if head[:1].isupper():
            outer = self._resolve_simple(head)
            if outer:
                return f"{outer}.{tail}"
        return name

    def _resolve_simple(self, name: str) -> Optional[str]:
        if name in self._imports:
            return self._imports[name]

        same_package = self.qualify(name)
        if same_package in self.index:
            return same_package

        for prefix in self.wildcard_imports:
            candidate = f"{prefix}.{name}"
            if candidate in self.index:
                return candidate

        if name in JAVA_LANG_TYPES:
            return f"java.lang.{name}"

        candidates = self.index.candidates(name)
        if len(candidates) == 1:
            return candidates[0]
        if len(candidates) > 1:
            raise ResolutionError(
                f"Ambiguous type '{name}': {', '.join(sorted(candidates))}"
            )
        return None
