"""Base reader interface for turning source files into resolved declarations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from ..models.declaration import ResolvedDeclaration


class BaseDeclarationReader(ABC):
    """Abstract base class for language-specific declaration readers.

    Each reader uses tree-sitter to parse source files and produces at most
    one ResolvedDeclaration per file, with referenced type names resolved
    against the whole set of files read together.
    """

    @property
    @abstractmethod
    def language(self) -> str:
        """The language this reader handles."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """File extensions this reader can handle."""
        pass

    @abstractmethod
    def read_files(self, file_paths: Iterable[Path]) -> list[ResolvedDeclaration]:
        """Read a set of files that resolve against each other.

        Args:
            file_paths: Source files belonging to one project

        Returns:
            Declarations in input file order; unreadable files are skipped
        """
        pass

    def can_read(self, file_path: Path) -> bool:
        """Check if this reader can handle the given file."""
        return any(str(file_path).endswith(ext) for ext in self.file_extensions)
