"""Scenario and Interaction records produced by the scenario builder."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Interaction:
    """One traversed caller-callee edge within a scenario."""

    caller_entity: str
    caller_method: str
    callee_entity: str
    callee_method: str


@dataclass(frozen=True)
class Scenario:
    """
    One complete traversal of caller-callee edges from an entry method.

    Attributes:
        entry_entity: Fully-qualified name of the entry entity
        entry_method: Method of the entry entity the traversal starts from
        interactions: Traversed edges in traversal order
    """

    entry_entity: str
    entry_method: str
    interactions: tuple[Interaction, ...] = field(default_factory=tuple)

    @property
    def title(self) -> str:
        return f"{self.entry_entity}::{self.entry_method}"

    @property
    def is_empty(self) -> bool:
        return not self.interactions

    @property
    def participants(self) -> list[str]:
        """Entity names in order of first appearance."""
        seen: dict[str, None] = {self.entry_entity: None}
        for interaction in self.interactions:
            seen.setdefault(interaction.caller_entity, None)
            seen.setdefault(interaction.callee_entity, None)
        return list(seen)

    def __len__(self) -> int:
        return len(self.interactions)
