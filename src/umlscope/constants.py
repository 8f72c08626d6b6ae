"""
Constants and Configuration Values for umlscope.

This module centralizes the magic strings and fixed values used throughout
the application: namespaces treated as library code, PlantUML notation,
file names and the property keys understood by the properties loader.

Usage:
    from umlscope.constants import (
        DEFAULT_LIBRARY_PREFIXES,
        CLASS_DIAGRAM_FILENAME,
        DiagramKind,
    )

Naming Conventions:
    - ALL_CAPS for constants
    - Grouped by category with clear section headers
"""

from enum import Enum
from pathlib import Path


# ============================================================================
# Application Metadata
# ============================================================================

APPLICATION_NAME = "umlscope"
APPLICATION_VERSION = "1.0.0"
APPLICATION_DESCRIPTION = "Class and sequence diagram generator for Java codebases"


# ============================================================================
# File System Paths
# ============================================================================

DEFAULT_DATA_DIRECTORY = Path.home() / ".umlscope"
DEFAULT_LOG_DIRECTORY = DEFAULT_DATA_DIRECTORY / "logs"
DEFAULT_INPUT_DIRECTORY = Path("./input")
DEFAULT_OUTPUT_DIRECTORY = Path("./output")
DEFAULT_HTMLDOC_DIRECTORY = Path("./htmldoc")

CLASS_DIAGRAM_FILENAME = "classDiagram.puml"
HTML_INDEX_FILENAME = "index.html"
HTML_IMAGES_DIRNAME = "images"
PUML_SUFFIX = ".puml"


# ============================================================================
# Relationship Classification
# ============================================================================

# Runtime/framework namespaces never drawn as relationship targets
DEFAULT_LIBRARY_PREFIXES = (
    "java.",
    "javax.",
    "org.springframework.",
)


# ============================================================================
# Diagram Types
# ============================================================================

class DiagramKind(str, Enum):
    """Diagram kinds the generator can produce."""

    CLASS = "class"
    SEQUENCE = "sequence"


DEFAULT_DIAGRAM_TYPES = [DiagramKind.CLASS.value, DiagramKind.SEQUENCE.value]


class ImageFormat(str, Enum):
    """Image formats PlantUML is asked to produce."""

    PNG = "png"
    SVG = "svg"


IMAGE_SUFFIXES = {".png", ".svg", ".jpg"}


# ============================================================================
# PlantUML Notation
# ============================================================================

PLANTUML_START = "@startuml"
PLANTUML_END = "@enduml"
CLASS_DIAGRAM_SKINPARAM = "skinparam linetype ortho"
SEQUENCE_TITLE_TEMPLATE = "title Sequence Diagram for {entity}::{method}"

VISIBILITY_SYMBOLS = {
    "public": "+",
    "private": "-",
    "protected": "#",
    "": "~",
}

PLANTUML_JAR_ENV_VAR = "PLANTUML_JAR_PATH"
PLANTUML_EXECUTABLE = "plantuml"
DEFAULT_RENDER_TIMEOUT_SECONDS = 60


# ============================================================================
# Properties File Keys
# ============================================================================

class PropertyKey(str, Enum):
    """Keys accepted in a ``key=value`` configuration properties file."""

    INPUT_DIRECTORY = "input.directory"
    OUTPUT_DIRECTORY = "output.directory"
    DIAGRAM_TYPES = "diagram.types"
    INCLUDE_PACKAGE = "include.package"
    HTMLDOC_DIRECTORY = "htmldoc.directory"


# ============================================================================
# Error Messages
# ============================================================================

class ErrorMessage:
    """Standardized error messages for consistent user experience."""

    BLANK_ENTITY_NAME = "Entity name cannot be null or empty"
    BLANK_METHOD_NAME = "Method name cannot be null or empty"
    BLANK_FIELD_NAME = "Field name cannot be null or empty"
    BLANK_TARGET_NAME = "Relative target name cannot be null or empty"
    NO_DECLARATIONS = "No declarations provided for analysis"
    INPUT_NOT_FOUND = "The input directory does not exist or is not a directory: {path}"
    NO_SOURCE_FILES = "No input files found in the input directory or its subdirectories: {path}"
    UNKNOWN_PROPERTY = "Unknown configuration key: {key}"
    INVALID_DIAGRAM_TYPE = "Invalid diagram type: {value}. Expected values: {valid}"
    PLANTUML_UNAVAILABLE = (
        "PlantUML is not available. Set {env_var} or install the 'plantuml' command."
    )
    NO_IMAGES_GENERATED = "No diagram images were generated for: {path}"
