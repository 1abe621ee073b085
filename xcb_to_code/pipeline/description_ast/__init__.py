"""
Description AST module.

Contains the element tree node definitions and the XML parser.
"""

from __future__ import annotations

from .nodes import DescriptionAST, ElementNode
from .parser import DescriptionParser

__all__ = [
    "ElementNode",
    "DescriptionAST",
    "DescriptionParser",
]
