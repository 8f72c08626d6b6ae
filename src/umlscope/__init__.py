"""
umlscope - UML Class and Sequence Diagrams from Java Sources.

This package analyzes a Java codebase statically and produces PlantUML
text for two diagram kinds:

Key Features:
    - **Class Diagram**: Declared types with their members and
      inheritance, implementation, association and call relationships
    - **Sequence Diagrams**: One call scenario per entry method, following
      caller-callee edges depth-first with cycle protection
    - **Project Filtering**: Only types under a package prefix are drawn;
      runtime and framework namespaces are excluded
    - **Rendering**: Images through a local PlantUML installation, plus an
      HTML index page

Quick Start:
    1. Install: pip install umlscope
    2. Generate: umlscope generate src/main/java -p com.example
    3. Open: htmldoc/index.html

Architecture:
    - cli.py: Command line interface
    - tools/: End-to-end generation driver
    - services/: Classification, extraction, scenarios, emitters, rendering
    - parsers/: tree-sitter based Java declaration reader
    - models/: Entities, relationships, scenarios, resolved declarations
    - config.py: Configuration with properties-file support
"""

__version__ = "1.0.0"
__author__ = "umlscope developers"
__description__ = "Class and sequence diagram generator for Java codebases"

from collections.abc import Iterable
from typing import Optional

# Public API
from umlscope.constants import (
    APPLICATION_NAME,
    APPLICATION_VERSION,
    DEFAULT_LIBRARY_PREFIXES,
    DiagramKind,
)

from umlscope.logging import (
    get_logger,
    setup_logging,
)

from umlscope.models import CodeEntity, ResolvedDeclaration, Scenario
from umlscope.services import (
    ClassDiagramEmitter,
    EntityGraph,
    RelationshipClassifier,
    RelationshipExtractor,
    ScenarioBuilder,
    SequenceDiagramEmitter,
)


def extract_entities(
    declarations: Iterable[ResolvedDeclaration],
    include_prefix: Optional[str] = "",
    library_prefixes: Iterable[str] = DEFAULT_LIBRARY_PREFIXES,
) -> EntityGraph:
    """Extract entities and relationships from resolved declarations."""
    classifier = RelationshipClassifier(include_prefix, library_prefixes)
    return RelationshipExtractor(classifier).extract_entities(declarations)


def build_scenarios(entities: Iterable[CodeEntity]) -> list[Scenario]:
    """Build one scenario per (entry entity, method) pair."""
    return ScenarioBuilder().build_scenarios(entities)


def render_class_diagram_text(
    entities: Iterable[CodeEntity], include_prefix: Optional[str] = ""
) -> str:
    """PlantUML class diagram text for the (prefix-filtered) entities."""
    return ClassDiagramEmitter(include_prefix).render(entities)


def render_sequence_diagram_text(scenario: Scenario) -> str:
    """PlantUML sequence diagram text for one scenario."""
    return SequenceDiagramEmitter().render(scenario)


__all__ = [
    # Metadata
    "__version__",
    "__author__",
    "__description__",

    # Constants
    "APPLICATION_NAME",
    "APPLICATION_VERSION",
    "DEFAULT_LIBRARY_PREFIXES",
    "DiagramKind",

    # Logging
    "get_logger",
    "setup_logging",

    # Operations
    "extract_entities",
    "build_scenarios",
    "render_class_diagram_text",
    "render_sequence_diagram_text",
]
