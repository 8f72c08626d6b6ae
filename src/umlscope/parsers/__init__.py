"""Source readers producing resolved declarations."""

from .base import BaseDeclarationReader
from .java_parser import JavaDeclarationReader
from .type_resolver import ProjectTypeIndex, ResolutionError, TypeResolver, normalize_type_name

__all__ = [
    "BaseDeclarationReader",
    "JavaDeclarationReader",
    "ProjectTypeIndex",
    "TypeResolver",
    "ResolutionError",
    "normalize_type_name",
]
