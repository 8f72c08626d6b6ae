"""
Data models for umlscope.

Provides the core data structures used throughout the application:

- **CodeEntity**: A declared class or interface with its methods, fields and
  outgoing relationships.
- **MethodEntity** / **FieldEntity**: Entity members.
- **Relative** / **RelationshipType**: One directed relationship between
  two entities.
- **Scenario** / **Interaction**: One call traversal for a sequence diagram.
- **ResolvedDeclaration** and friends: The resolved output of parsing that
  the relationship extractor consumes.
"""

from .declaration import (
    CallExpression,
    FieldAccessExpression,
    ResolvedDeclaration,
    ResolvedField,
    ResolvedMethod,
    TypeReference,
)
from .entity import CodeEntity, FieldEntity, MethodEntity, Relative, RelationshipType
from .scenario import Interaction, Scenario

__all__ = [
    "CodeEntity",
    "MethodEntity",
    "FieldEntity",
    "Relative",
    "RelationshipType",
    "Scenario",
    "Interaction",
    "ResolvedDeclaration",
    "ResolvedMethod",
    "ResolvedField",
    "TypeReference",
    "CallExpression",
    "FieldAccessExpression",
]
