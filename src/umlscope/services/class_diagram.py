"""
Class Diagram Emitter.

Serializes entities into PlantUML class diagram text:

    @startuml
    skinparam linetype ortho
    class com.app.OrderService {
        -repository : OrderRepository
        +place(Order) : void
    }
    com.app.OrderService --> com.app.OrderRepository : association
    @enduml

Relationship lines are deduplicated by (source, kind, target) and never
point an entity at itself. The output depends only on the input entities
and their order, so identical input yields identical text.
"""

from collections.abc import Iterable
from typing import Optional

from ..constants import (
    CLASS_DIAGRAM_SKINPARAM,
    PLANTUML_END,
    PLANTUML_START,
    VISIBILITY_SYMBOLS,
)
from ..logging import get_logger
from ..models.entity import CodeEntity, FieldEntity, MethodEntity, RelationshipType
from .graph import EntityGraph

logger = get_logger(__name__)

INDENT = "    "

RELATIONSHIP_NOTATION = {
    RelationshipType.INHERITANCE: ("--|>", "extends"),
    RelationshipType.IMPLEMENTATION: ("..|>", "implements"),
    RelationshipType.ASSOCIATION: ("-->", "association"),
    RelationshipType.CALLER_CALLEE: ("..>", "caller-callee"),
}


def _visibility_symbol(visibility: str) -> str:
    return VISIBILITY_SYMBOLS.get((visibility or "").strip().lower(), VISIBILITY_SYMBOLS[""])


def format_field(field_entity: FieldEntity) -> str:
    return f"{_visibility_symbol(field_entity.visibility)}{field_entity.name} : {field_entity.type}"


def format_method(method: MethodEntity) -> str:
    parameters = ", ".join(method.parameters)
    return f"{_visibility_symbol(method.visibility)}{method.name}({parameters}) : {method.return_type}"


class ClassDiagramEmitter:
    """
    Renders the class diagram for an optionally package-filtered entity set.

    Args:
        include_prefix: Only entities whose name starts with this prefix are
                        drawn. Empty draws every entity.
    """

    def __init__(self, include_prefix: Optional[str] = ""):
        self.include_prefix = include_prefix or ""

    def render(self, entities: Iterable[CodeEntity]) -> str:
        if not isinstance(entities, EntityGraph):
            entities = EntityGraph(entities)
        selected = entities.filter_by_prefix(self.include_prefix)

        lines = [PLANTUML_START, CLASS_DIAGRAM_SKINPARAM]
        for entity in selected:
            lines.extend(self._render_block(entity))
        lines.extend(self._render_relationships(selected))
        lines.append(PLANTUML_END)

        logger.debug("Class diagram rendered", extra={"entity_count": len(selected)})
        return "\n".join(lines) + "\n"

    def _render_block(self, entity: CodeEntity) -> list[str]:
        block = [f"class {entity.name} {{"]
        block.extend(INDENT + format_field(f) for f in entity.fields)
        block.extend(INDENT + format_method(m) for m in entity.methods)
        block.append("}")
        return block

    def _render_relationships(self, entities: list[CodeEntity]) -> list[str]:
        seen: set[tuple[str, RelationshipType, str]] = set()
        lines = []
        for entity in entities:
            for relative in entity.relatives:
                if relative.target == entity.name:
                    continue
                key = (entity.name, relative.relationship_type, relative.target)
                if key in seen:
                    continue
                seen.add(key)
                arrow, label = RELATIONSHIP_NOTATION[relative.relationship_type]
                lines.append(f"{entity.name} {arrow} {relative.target} : {label}")
        return lines
