"""
Tools for umlscope.

**Diagram Generation**: generate_diagrams
"""

from .generate_diagrams import generate_diagrams

__all__ = [
    "generate_diagrams",
]
