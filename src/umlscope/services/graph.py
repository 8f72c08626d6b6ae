"""
Entity Graph - Name-Keyed Collection of Analyzed Entities.

Relationships store target names, not entity references, so every consumer
that follows a relationship looks the target up by name. The graph keeps
entities in insertion order and precomputes a read-only name index once,
when first requested, so traversals never rebuild it.

Usage:
    graph = EntityGraph()
    graph.add(CodeEntity("com.app.A"))
    graph.add(CodeEntity("com.app.B"))

    index = graph.index()
    index["com.app.A"]
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Optional

from ..logging import get_logger
from ..models.entity import CodeEntity

logger = get_logger(__name__)


class EntityGraph:
    """Ordered, name-unique collection of CodeEntity values."""

    def __init__(self, entities: Optional[Iterable[CodeEntity]] = None):
        self._entities: dict[str, CodeEntity] = {}
        self._index: Optional[Mapping[str, CodeEntity]] = None
        for entity in entities or ():
            self.add(entity)

    def add(self, entity: CodeEntity) -> bool:
        """
        Add an entity unless one with the same name is already present.

        Returns:
            True if added, False if a same-named entity was kept instead.

        Raises:
            RuntimeError: If the graph was already indexed.
        """
        if self._index is not None:
            raise RuntimeError("Entity graph is read-only once indexed")
        if entity.name in self._entities:
            logger.warning("Duplicate entity ignored", extra={"entity": entity.name})
            return False
        self._entities[entity.name] = entity
        return True

    def index(self) -> Mapping[str, CodeEntity]:
        if self._index is None:
            self._index = MappingProxyType(dict(self._entities))
        return self._index

    def get(self, name: str) -> Optional[CodeEntity]:
        return self._entities.get(name)

    def filter_by_prefix(self, prefix: Optional[str]) -> list[CodeEntity]:
        """Entities whose name starts with ``prefix`` (all when empty)."""
        if not prefix:
            return list(self._entities.values())
        return [e for e in self._entities.values() if e.name.startswith(prefix)]

    def __contains__(self, name: object) -> bool:
        return name in self._entities

    def __iter__(self) -> Iterator[CodeEntity]:
        return iter(self._entities.values())

    def __len__(self) -> int:
        return len(self._entities)

    def __repr__(self) -> str:
        return f"EntityGraph(entities={len(self._entities)})"
