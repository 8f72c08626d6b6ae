"""Project analyzer: source discovery, declaration reading and extraction."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from ..config import Config
from ..constants import ErrorMessage
from ..logging import get_logger
from ..models.declaration import ResolvedDeclaration
from ..parsers import BaseDeclarationReader, JavaDeclarationReader
from .classifier import RelationshipClassifier
from .extraction import RelationshipExtractor
from .graph import EntityGraph

console = Console(stderr=True)
logger = get_logger(__name__)


@dataclass
class AnalysisResult:
    """Result of analyzing a source tree.

    Contains the resolved declarations (for diagnostics) and the assembled
    entity graph (for diagram generation).
    """

    graph: EntityGraph
    declarations: list[ResolvedDeclaration] = field(default_factory=list)
    files_found: int = 0
    files_read: int = 0


class ProjectAnalyzer:
    """Turns a directory of sources into an EntityGraph."""

    def __init__(
        self,
        config: Optional[Config] = None,
        reader: Optional[BaseDeclarationReader] = None,
    ):
        self.config = config or Config()
        self.reader = reader or JavaDeclarationReader()
        self.extractor = RelationshipExtractor(
            RelationshipClassifier.from_config(self.config.classifier)
        )

    def find_source_files(self, input_dir: Optional[Path] = None) -> list[Path]:
        """
        Find all source files below the input directory.

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        input_dir = Path(input_dir or self.config.source.input_dir)
        if not input_dir.is_dir():
            raise FileNotFoundError(ErrorMessage.INPUT_NOT_FOUND.format(path=input_dir))

        extensions = set(self.config.source.file_extensions)
        source_files = []
        for file_path in input_dir.rglob("*"):
            if not file_path.is_file() or file_path.suffix not in extensions:
                continue
            if self.config.source.is_ignored(str(file_path.relative_to(input_dir))):
                continue
            source_files.append(file_path)

        return sorted(source_files)

    def analyze(self, input_dir: Optional[Path] = None) -> AnalysisResult:
        """
        Read every source file and extract the entity graph.

        Raises:
            FileNotFoundError: If the input directory does not exist
            ValueError: If no source files or no declarations are found
        """
        input_dir = Path(input_dir or self.config.source.input_dir)
        source_files = self.find_source_files(input_dir)
        if not source_files:
            raise ValueError(ErrorMessage.NO_SOURCE_FILES.format(path=input_dir))

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task(f"Reading {len(source_files)} source files...", total=None)
            declarations = self.reader.read_files(source_files)

        logger.info(
            "Declarations read",
            extra={"files_found": len(source_files), "declarations": len(declarations)},
        )

        graph = self.extractor.extract_entities(declarations)
        return AnalysisResult(
            graph=graph,
            declarations=declarations,
            files_found=len(source_files),
            files_read=len(declarations),
        )
