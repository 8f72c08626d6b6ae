"""
Services Layer for umlscope.

This module provides the core services of a diagram generation run. Each
service encapsulates a specific capability:

**RelationshipClassifier**:
    Pure predicates deciding which referenced names are project types.

**RelationshipExtractor**:
    Turns resolved declarations into entities with relationships.

**EntityGraph**:
    Name-keyed, ordered entity collection with a precomputed index.

**ScenarioBuilder**:
    Finds entry points and walks caller-callee edges into scenarios.

**ClassDiagramEmitter** / **SequenceDiagramEmitter**:
    Serialize entities and scenarios into PlantUML text.

**ProjectAnalyzer**:
    Finds source files and runs reading plus extraction.

**PlantUmlRenderer**:
    Runs a local PlantUML installation to produce images.

**HtmlDocGenerator**:
    Writes an HTML index page of the produced images.

Architecture:
    Services take their configuration in the constructor and keep no
    global state. The emitters and the scenario builder are pure.

Usage:
    from umlscope.services import (
        RelationshipClassifier,
        RelationshipExtractor,
        ScenarioBuilder,
        SequenceDiagramEmitter,
    )

    extractor = RelationshipExtractor(RelationshipClassifier("com.app"))
    graph = extractor.extract_entities(declarations)

    emitter = SequenceDiagramEmitter()
    for scenario in ScenarioBuilder().build_scenarios(graph):
        print(emitter.render(scenario))
"""

from .analyzer import AnalysisResult, ProjectAnalyzer
from .class_diagram import ClassDiagramEmitter
from .classifier import RelationshipClassifier
from .extraction import RelationshipExtractor
from .graph import EntityGraph
from .html_docs import HtmlDocGenerator
from .renderer import PlantUmlRenderer, RenderError
from .scenario_builder import ScenarioBuilder, find_entry_points
from .sequence_diagram import SequenceDiagramEmitter

__all__ = [
    # Relationship model
    "RelationshipClassifier",
    "RelationshipExtractor",
    "EntityGraph",
    # Scenarios
    "ScenarioBuilder",
    "find_entry_points",
    # Diagram text
    "ClassDiagramEmitter",
    "SequenceDiagramEmitter",
    # Driver support
    "ProjectAnalyzer",
    "AnalysisResult",
    "PlantUmlRenderer",
    "RenderError",
    "HtmlDocGenerator",
]
