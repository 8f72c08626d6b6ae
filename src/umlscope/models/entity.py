"""
Entity Model - Declared Types and Their Relationships.

This module defines the in-memory model of an analyzed codebase:

1. **CodeEntity**: A declared class or interface
   - Keyed by its fully-qualified name
   - Owns its methods, fields, and outgoing relatives

2. **MethodEntity** / **FieldEntity**: Members of an entity
   - Identity is (name, return type) and (name, type) respectively

3. **Relative**: One directed relationship to another entity
   - The target is a fully-qualified name, looked up by name, never owned

Data Flow:
    ResolvedDeclaration → RelationshipExtractor → CodeEntity (+ Relatives)
                                   ↓
                             EntityGraph → emitters / ScenarioBuilder

Example:
    entity = CodeEntity("com.example.OrderService")
    entity.add_method(MethodEntity("placeOrder", "void", ["Order"], "public"))
    entity.add_field(FieldEntity("repository", "com.example.OrderRepository", "private"))
    entity.add_relative(Relative(
        RelationshipType.CALLER_CALLEE,
        "com.example.OrderRepository",
        caller_method="placeOrder",
        callee_method="save",
    ))
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from ..constants import ErrorMessage
from ..logging import get_logger

logger = get_logger(__name__)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


class RelationshipType(str, Enum):
    """
    Kinds of directed relationships between entities.

    Values:
        INHERITANCE: The owner extends the target
        IMPLEMENTATION: The owner implements the target interface
        ASSOCIATION: The owner holds or reads state of the target
        CALLER_CALLEE: A method of the owner calls a method of the target
    """

    INHERITANCE = "inheritance"
    IMPLEMENTATION = "implementation"
    ASSOCIATION = "association"
    CALLER_CALLEE = "caller_callee"


@dataclass
class MethodEntity:
    """
    A method declared on an entity.

    Two methods with the same name and return type are the same method,
    whatever their parameter lists.
    """

    name: str
    return_type: str = "void"
    parameters: list[str] = field(default_factory=list)
    visibility: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.return_type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MethodEntity):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "MethodEntity") -> bool:
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass
class FieldEntity:
    """A field declared on an entity. Identity is (name, type)."""

    name: str
    type: str
    visibility: str = ""

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.type)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldEntity):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: "FieldEntity") -> bool:
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)


@dataclass(frozen=True)
class Relative:
    """
    One directed relationship owned by a source entity.

    Attributes:
        relationship_type: Kind of relationship
        target: Fully-qualified name of the target entity
        caller_method: Method of the owner initiating the relationship
                       (CALLER_CALLEE, and field-access ASSOCIATION)
        callee_method: Method called on the target (CALLER_CALLEE), or the
                       field read on the target (field-access ASSOCIATION)
    """

    relationship_type: RelationshipType
    target: str
    caller_method: Optional[str] = None
    callee_method: Optional[str] = None

    def __post_init__(self):
        if _is_blank(self.target):
            raise ValueError(ErrorMessage.BLANK_TARGET_NAME)

    @property
    def is_call(self) -> bool:
        return self.relationship_type == RelationshipType.CALLER_CALLEE


class CodeEntity:
    """
    A declared class or interface with its members and relationships.

    Members are kept in key-ordered maps so iteration is deterministic;
    relatives keep insertion order. All collections only grow.

    Raises:
        ValueError: If the name is empty or blank.
    """

    def __init__(self, name: str):
        if _is_blank(name):
            raise ValueError(ErrorMessage.BLANK_ENTITY_NAME)
        self._name = name
        self._methods: dict[tuple[str, str], MethodEntity] = {}
        self._fields: dict[tuple[str, str], FieldEntity] = {}
        self._relatives: list[Relative] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def methods(self) -> list[MethodEntity]:
        """Methods ordered by (name, return type)."""
        return [self._methods[key] for key in sorted(self._methods)]

    @property
    def fields(self) -> list[FieldEntity]:
        """Fields ordered by (name, type)."""
        return [self._fields[key] for key in sorted(self._fields)]

    @property
    def relatives(self) -> tuple[Relative, ...]:
        return tuple(self._relatives)

    def relatives_of(self, relationship_type: RelationshipType) -> list[Relative]:
        """Relatives of one kind, in insertion order."""
        return [r for r in self._relatives if r.relationship_type == relationship_type]

    def calls_from(self, method_name: str) -> Iterator[Relative]:
        """CALLER_CALLEE relatives initiated by ``method_name``."""
        for relative in self._relatives:
            if relative.is_call and relative.caller_method == method_name:
                yield relative

    def add_method(self, method: MethodEntity) -> "CodeEntity":
        if method is None or _is_blank(method.name):
            raise ValueError(ErrorMessage.BLANK_METHOD_NAME)
        if method.key in self._methods:
            logger.warning(
                "Duplicate method not added",
                extra={"entity": self._name, "method": method.name},
            )
        else:
            self._methods[method.key] = method
            logger.debug("Method added", extra={"entity": self._name, "method": method.name})
        return self

    def add_field(self, field_entity: FieldEntity) -> "CodeEntity":
        if field_entity is None or _is_blank(field_entity.name):
            raise ValueError(ErrorMessage.BLANK_FIELD_NAME)
        if field_entity.key in self._fields:
            logger.warning(
                "Duplicate field not added",
                extra={"entity": self._name, "field": field_entity.name},
            )
        else:
            self._fields[field_entity.key] = field_entity
            logger.debug("Field added", extra={"entity": self._name, "field": field_entity.name})
        return self

    def add_relative(self, relative: Relative) -> "CodeEntity":
        if relative is None:
            raise ValueError("Relative cannot be None")
        self._relatives.append(relative)
        return self

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodeEntity):
            return NotImplemented
        return (
            self._name == other._name
            and self._methods == other._methods
            and self._fields == other._fields
            and self._relatives == other._relatives
        )

    def __hash__(self) -> int:
        return hash(self._name)

    def __repr__(self) -> str:
        return (
            f"CodeEntity(name={self._name!r}, methods={len(self._methods)}, "
            f"fields={len(self._fields)}, relatives={len(self._relatives)})"
        )
