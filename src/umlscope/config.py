"""
Configuration Module for umlscope.

This module provides the configuration system for a diagram generation run.
The configuration follows a hierarchical structure:
    - ClassifierConfig: Which names count as project entities
    - SourceConfig: Where source files are read from
    - OutputConfig: What is produced and where it is written
    - RenderConfig: How PlantUML is invoked to produce images
    - Config: Main configuration aggregating all sub-configs

There is no process-wide configuration instance. A Config value is built
once by the caller (CLI, tests, embedding application) and passed into
each stage's constructor.

Example Usage:
    >>> from umlscope.config import Config, ClassifierConfig
    >>> config = Config(classifier=ClassifierConfig(include_prefix="com.app"))
    >>> config = Config.from_properties(Path("config.properties"))
"""

import fnmatch
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_DIAGRAM_TYPES,
    DEFAULT_HTMLDOC_DIRECTORY,
    DEFAULT_INPUT_DIRECTORY,
    DEFAULT_LIBRARY_PREFIXES,
    DEFAULT_OUTPUT_DIRECTORY,
    DEFAULT_RENDER_TIMEOUT_SECONDS,
    DiagramKind,
    ErrorMessage,
    ImageFormat,
    PropertyKey,
)


class ClassifierConfig(BaseModel):
    """
    Configuration for relationship classification.

    Attributes:
        include_prefix: Names starting with this prefix belong to the project.
                        Empty means every non-library name belongs.
        library_prefixes: Namespaces treated as runtime/framework code
    """

    include_prefix: str = Field(
        default="",
        description="Package prefix of project entities (empty includes everything)",
    )
    library_prefixes: list[str] = Field(
        default=list(DEFAULT_LIBRARY_PREFIXES),
        description="Namespace prefixes excluded as library code",
    )

    @field_validator("include_prefix", mode="before")
    @classmethod
    def _none_is_empty(cls, value):
        return "" if value is None else value


class SourceConfig(BaseModel):
    """
    Configuration for source discovery.

    Attributes:
        input_dir: Root directory of the sources to analyze
        file_extensions: Extensions of source files to read
        ignore_patterns: Glob patterns (relative paths) to skip
    """

    input_dir: Path = Field(
        default=DEFAULT_INPUT_DIRECTORY,
        description="Directory containing the source files",
    )
    file_extensions: list[str] = Field(default=[".java"])
    ignore_patterns: list[str] = Field(
        default=[
            "**/.git/**",
            "**/target/**",
            "**/build/**",
            "**/out/**",
            "**/node_modules/**",
        ],
        description="Glob patterns to ignore during discovery",
    )

    def is_ignored(self, relative_path: str) -> bool:
        relative_path = relative_path.replace("\\", "/")
        return any(
            fnmatch.fnmatch(relative_path, pattern) or fnmatch.fnmatch(f"/{relative_path}", pattern)
            for pattern in self.ignore_patterns
        )


class OutputConfig(BaseModel):
    """
    Configuration for generated artifacts.

    Attributes:
        output_dir: Directory receiving .puml files and images
        diagram_types: Diagram kinds to generate ("class", "sequence")
        htmldoc_dir: Directory receiving the HTML index of images
        write_html: Whether to write the HTML index
        skip_empty_scenarios: Do not write sequence diagrams without interactions
    """

    output_dir: Path = Field(default=DEFAULT_OUTPUT_DIRECTORY)
    diagram_types: list[str] = Field(default=list(DEFAULT_DIAGRAM_TYPES))
    htmldoc_dir: Path = Field(default=DEFAULT_HTMLDOC_DIRECTORY)
    write_html: bool = Field(default=True)
    skip_empty_scenarios: bool = Field(default=True)

    @field_validator("diagram_types")
    @classmethod
    def _check_diagram_types(cls, value: list[str]) -> list[str]:
        valid = [kind.value for kind in DiagramKind]
        cleaned = [item.strip().lower() for item in value if item.strip()]
        for item in cleaned:
            if item not in valid:
                raise ValueError(
                    ErrorMessage.INVALID_DIAGRAM_TYPE.format(value=item, valid=", ".join(valid))
                )
        return cleaned

    def wants(self, kind: DiagramKind) -> bool:
        return kind.value in self.diagram_types


class RenderConfig(BaseModel):
    """
    Configuration for PlantUML image rendering.

    Attributes:
        enabled: Render images after writing .puml files
        jar_path: Path to plantuml.jar (falls back to PLANTUML_JAR_PATH,
                  then a 'plantuml' executable on PATH)
        java_executable: Java launcher used with the jar
        image_format: Output image format
        timeout_seconds: Per-diagram rendering timeout
    """

    enabled: bool = Field(default=True)
    jar_path: Optional[Path] = Field(default=None)
    java_executable: str = Field(default="java")
    image_format: ImageFormat = Field(default=ImageFormat.PNG)
    timeout_seconds: int = Field(default=DEFAULT_RENDER_TIMEOUT_SECONDS, ge=1)


class Config(BaseModel):
    """
    Main configuration for umlscope.

    Example:
        >>> config = Config(
        ...     source=SourceConfig(input_dir=Path("src/main/java")),
        ...     classifier=ClassifierConfig(include_prefix="com.example"),
        ...     output=OutputConfig(diagram_types=["class"]),
        ... )
    """

    classifier: ClassifierConfig = Field(default_factory=ClassifierConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def load_default(cls) -> "Config":
        return cls()

    @classmethod
    def from_properties(cls, file_path: Path) -> "Config":
        """
        Load configuration from a ``key=value`` properties file.

        Blank lines and lines starting with ``#`` are skipped. Recognized
        keys are listed in PropertyKey; any other key is rejected.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: On unknown keys or invalid diagram types
        """
        settings: dict[str, str] = {}
        for line in Path(file_path).read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            key, separator, value = line.partition("=")
            if not separator:
                continue
            settings[key.strip()] = value.strip()

        return cls.from_settings(settings)

    @classmethod
    def from_settings(cls, settings: dict[str, str]) -> "Config":
        """Build a configuration from property-style keys over the defaults."""
        known = {key.value for key in PropertyKey}
        for key in settings:
            if key not in known:
                raise ValueError(ErrorMessage.UNKNOWN_PROPERTY.format(key=key))

        source = SourceConfig()
        output = OutputConfig()
        classifier = ClassifierConfig()

        if settings.get(PropertyKey.INPUT_DIRECTORY.value):
            source = SourceConfig(input_dir=Path(settings[PropertyKey.INPUT_DIRECTORY.value]))

        output_updates: dict = {}
        if settings.get(PropertyKey.OUTPUT_DIRECTORY.value):
            output_updates["output_dir"] = Path(settings[PropertyKey.OUTPUT_DIRECTORY.value])
        if settings.get(PropertyKey.HTMLDOC_DIRECTORY.value):
            output_updates["htmldoc_dir"] = Path(settings[PropertyKey.HTMLDOC_DIRECTORY.value])
        if PropertyKey.DIAGRAM_TYPES.value in settings:
            output_updates["diagram_types"] = settings[PropertyKey.DIAGRAM_TYPES.value].split(",")
        if output_updates:
            output = OutputConfig(**output_updates)

        if PropertyKey.INCLUDE_PACKAGE.value in settings:
            classifier = ClassifierConfig(
                include_prefix=settings[PropertyKey.INCLUDE_PACKAGE.value]
            )

        return cls(classifier=classifier, source=source, output=output)
