"""
Relationship Classifier.

Decides whether a referenced name may appear as a relationship target:
project types are kept, library types (runtime and framework namespaces)
and self references are dropped.

Example:
    classifier = RelationshipClassifier(include_prefix="com.app")
    classifier.is_relevant("com.app.Repo", owner="com.app.Service")  # True
    classifier.is_relevant("java.util.List", owner="com.app.Service")  # False
"""

from typing import Iterable, Optional

from ..config import ClassifierConfig
from ..constants import DEFAULT_LIBRARY_PREFIXES


class RelationshipClassifier:
    """Pure name predicates parameterized by the project's package prefix."""

    def __init__(
        self,
        include_prefix: Optional[str] = "",
        library_prefixes: Iterable[str] = DEFAULT_LIBRARY_PREFIXES,
    ):
        self.include_prefix = include_prefix or ""
        self.library_prefixes = tuple(library_prefixes)

    @classmethod
    def from_config(cls, config: ClassifierConfig) -> "RelationshipClassifier":
        return cls(config.include_prefix, config.library_prefixes)

    def is_project_entity(self, name: str) -> bool:
        if not self.include_prefix:
            return True
        return name.startswith(self.include_prefix)

    def is_library_entity(self, name: str) -> bool:
        return name.startswith(self.library_prefixes)

    def is_irrelevant(self, name: str) -> bool:
        return self.is_library_entity(name) or not self.is_project_entity(name)

    def is_relevant(self, name: Optional[str], owner: str) -> bool:
        """True if ``name`` is a project, non-library type other than ``owner``."""
        if not name:
            return False
        return not self.is_irrelevant(name) and name != owner
