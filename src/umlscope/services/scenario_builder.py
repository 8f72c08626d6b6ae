"""
Scenario Builder - Call Scenarios for Sequence Diagrams.

An entry point is an entity that no CALLER_CALLEE relationship targets.
For every entry point and every one of its methods, the builder walks
the caller-callee edges depth-first and records each traversed edge as an
Interaction. All depths append to the same Scenario, so one scenario is
the full call tree reachable from its entry method.

Traversal rules:
    - A visited set of (entity, method) pairs guards against cycles
    - Edges of one method are followed in the order they were extracted
    - An edge whose target entity is unknown is skipped with a warning

Example:
    A.a calls B.b, B.b calls C.c

    builder = ScenarioBuilder()
    [scenario] = builder.build_scenarios(graph)
    scenario.interactions
    # (Interaction("A", "a", "B", "b"), Interaction("B", "b", "C", "c"))
"""

from collections.abc import Iterable, Iterator, Mapping

from ..logging import get_logger
from ..models.entity import CodeEntity, Relative
from ..models.scenario import Interaction, Scenario
from .graph import EntityGraph

logger = get_logger(__name__)


def find_entry_points(entities: Iterable[CodeEntity]) -> list[CodeEntity]:
    """Entities never targeted by a CALLER_CALLEE relative, in input order."""
    entities = list(entities)
    callee_names = {
        relative.target
        for entity in entities
        for relative in entity.relatives
        if relative.is_call
    }
    return [entity for entity in entities if entity.name not in callee_names]


def _as_index(entities: Iterable[CodeEntity]) -> tuple[list[CodeEntity], Mapping[str, CodeEntity]]:
    if isinstance(entities, EntityGraph):
        return list(entities), entities.index()
    graph = EntityGraph(entities)
    return list(graph), graph.index()


class ScenarioBuilder:
    """Builds one Scenario per (entry entity, method) pair."""

    def build_scenarios(self, entities: Iterable[CodeEntity]) -> list[Scenario]:
        """
        Build scenarios for every entry point of the collection.

        Args:
            entities: An EntityGraph or any iterable of entities

        Returns:
            Scenarios ordered by entry entity (input order), then by method
        """
        ordered, index = _as_index(entities)
        entry_points = find_entry_points(ordered)

        scenarios: list[Scenario] = []
        for entry in entry_points:
            scenarios.extend(self.build_scenarios_for(entry, index))

        logger.info(
            "Scenarios built",
            extra={"entry_points": len(entry_points), "scenario_count": len(scenarios)},
        )
        return scenarios

    def build_scenarios_for(
        self, entry: CodeEntity, index: Mapping[str, CodeEntity]
    ) -> list[Scenario]:
        """One scenario per method of ``entry``, each with a fresh visited set."""
        scenarios = []
        for method in entry.methods:
            interactions = self._expand(entry, method.name, index)
            scenarios.append(Scenario(entry.name, method.name, tuple(interactions)))
        return scenarios

    def _expand(
        self, entry: CodeEntity, method_name: str, index: Mapping[str, CodeEntity]
    ) -> list[Interaction]:
        interactions: list[Interaction] = []
        visited: set[tuple[str, str]] = {(entry.name, method_name)}

        # Explicit stack of pending edges per (entity, method) frame keeps
        # recursion order without recursion depth limits
        stack: list[tuple[CodeEntity, str, Iterator[Relative]]] = [
            (entry, method_name, entry.calls_from(method_name))
        ]
        while stack:
            entity, caller_method, pending = stack[-1]
            relative = next(pending, None)
            if relative is None:
                stack.pop()
                continue

            callee = index.get(relative.target)
            if callee is None:
                logger.warning(
                    "Callee not found in entity collection",
                    extra={
                        "caller": entity.name,
                        "method": caller_method,
                        "target": relative.target,
                    },
                )
                continue

            interactions.append(
                Interaction(entity.name, caller_method, callee.name, relative.callee_method)
            )

            key = (callee.name, relative.callee_method)
            if key in visited:
                continue
            visited.add(key)
            stack.append((callee, relative.callee_method, callee.calls_from(relative.callee_method)))

        return interactions
