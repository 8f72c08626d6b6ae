"""
Relationship Extraction Service.

Turns resolved declarations into CodeEntity values with their outgoing
relationships. Every referenced name is passed through the
RelationshipClassifier so that only project types other than the owner
become relationship targets.

Per declaration the extractor records:
    - INHERITANCE for each resolved, relevant supertype
    - IMPLEMENTATION for each resolved, relevant implemented interface
    - ASSOCIATION for each field whose resolved type is relevant
    - ASSOCIATION for each field access on a relevant owner type
    - CALLER_CALLEE for each call on a relevant receiver type

Failures are local: a reference that failed to resolve, or a member with a
blank name, is logged and skipped. Only an empty input is fatal.

Usage:
    extractor = RelationshipExtractor(RelationshipClassifier("com.app"))
    graph = extractor.extract_entities(declarations)
"""

from collections.abc import Iterable
from typing import Optional

from ..constants import ErrorMessage
from ..logging import get_logger
from ..models.declaration import ResolvedDeclaration, ResolvedMethod, TypeReference
from ..models.entity import CodeEntity, FieldEntity, MethodEntity, Relative, RelationshipType
from .classifier import RelationshipClassifier
from .graph import EntityGraph

logger = get_logger(__name__)


class RelationshipExtractor:
    """Builds entities and relatives from resolved declarations."""

    def __init__(self, classifier: Optional[RelationshipClassifier] = None):
        self.classifier = classifier or RelationshipClassifier()

    def extract_entities(self, declarations: Iterable[ResolvedDeclaration]) -> EntityGraph:
        """
        Extract one entity per declaration and assemble them into a graph.

        Declarations outside the project prefix, and declarations that fail
        validation, are skipped. Same-named declarations keep the first.

        Args:
            declarations: Resolved declarations, one per source file

        Returns:
            EntityGraph of the extracted entities in input order

        Raises:
            ValueError: If no declarations are given
        """
        declarations = list(declarations or ())
        if not declarations:
            raise ValueError(ErrorMessage.NO_DECLARATIONS)

        graph = EntityGraph()
        skipped = 0
        for declaration in declarations:
            if not self.classifier.is_project_entity(declaration.name or ""):
                logger.debug(
                    "Skipping declaration outside the include package",
                    extra={"entity": declaration.name},
                )
                skipped += 1
                continue
            try:
                entity = self.extract_entity(declaration)
            except ValueError as e:
                logger.error(
                    "Skipping invalid declaration",
                    extra={"file_path": declaration.file_path, "error": str(e)},
                )
                skipped += 1
                continue
            graph.add(entity)

        logger.info(
            "Entities extracted",
            extra={"entity_count": len(graph), "skipped": skipped},
        )
        return graph

    def extract_entity(self, declaration: ResolvedDeclaration) -> CodeEntity:
        """
        Build the entity for one declaration.

        Raises:
            ValueError: If the declaration's own name is blank
        """
        entity = CodeEntity(declaration.name)

        self._extract_parents(declaration.supertypes, RelationshipType.INHERITANCE, entity)
        self._extract_parents(declaration.interfaces, RelationshipType.IMPLEMENTATION, entity)

        for method in declaration.methods:
            try:
                entity.add_method(
                    MethodEntity(
                        method.name,
                        method.return_type,
                        list(method.parameter_types),
                        method.visibility,
                    )
                )
            except ValueError as e:
                logger.warning(
                    "Skipping invalid method",
                    extra={"entity": entity.name, "error": str(e)},
                )
                continue
            self._extract_calls(method, entity)
            self._extract_field_accesses(method, entity)

        for declared_field in declaration.fields:
            try:
                entity.add_field(
                    FieldEntity(declared_field.name, declared_field.type_name, declared_field.visibility)
                )
            except ValueError as e:
                logger.warning(
                    "Skipping invalid field",
                    extra={"entity": entity.name, "error": str(e)},
                )
                continue
            if declared_field.error:
                logger.warning(
                    "Failed to resolve field type",
                    extra={
                        "entity": entity.name,
                        "field": declared_field.name,
                        "error": declared_field.error,
                    },
                )
                continue
            if self.classifier.is_relevant(declared_field.resolved_type, entity.name):
                entity.add_relative(
                    Relative(RelationshipType.ASSOCIATION, declared_field.resolved_type)
                )

        logger.debug(
            "Entity extracted",
            extra={"entity": entity.name, "relatives": len(entity.relatives)},
        )
        return entity

    def _extract_parents(
        self,
        references: list[TypeReference],
        relationship_type: RelationshipType,
        entity: CodeEntity,
    ) -> None:
        for reference in references:
            if not reference.is_resolved:
                logger.warning(
                    "Failed to resolve parent type",
                    extra={"entity": entity.name, "type": reference.raw, "error": reference.error},
                )
                continue
            if not self.classifier.is_relevant(reference.resolved, entity.name):
                logger.debug("Skipping irrelevant parent", extra={"type": reference.resolved})
                continue
            entity.add_relative(Relative(relationship_type, reference.resolved))

    def _extract_calls(self, method: ResolvedMethod, entity: CodeEntity) -> None:
        for call in method.calls:
            if call.error:
                logger.warning(
                    "Failed to resolve call receiver",
                    extra={
                        "entity": entity.name,
                        "method": method.name,
                        "call": call.method_name,
                        "error": call.error,
                    },
                )
                continue
            # No resolved receiver means a call on the owner itself
            callee_type = call.receiver_type or entity.name
            if not self.classifier.is_relevant(callee_type, entity.name):
                continue
            entity.add_relative(
                Relative(
                    RelationshipType.CALLER_CALLEE,
                    callee_type,
                    caller_method=method.name,
                    callee_method=call.method_name,
                )
            )

    def _extract_field_accesses(self, method: ResolvedMethod, entity: CodeEntity) -> None:
        for access in method.field_accesses:
            if access.error:
                logger.warning(
                    "Failed to resolve field access scope",
                    extra={"entity": entity.name, "field": access.field_name, "error": access.error},
                )
                continue
            if not self.classifier.is_relevant(access.owner_type, entity.name):
                continue
            entity.add_relative(
                Relative(
                    RelationshipType.ASSOCIATION,
                    access.owner_type,
                    caller_method=method.name,
                    callee_method=access.field_name,
                )
            )
