"""
Element tree node definitions for protocol descriptions.

These nodes are a neutral copy of the XML markup: tags, attributes,
text and children, without any knowledge of what the declarations mean.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ElementNode:
    """One XML element."""

    tag: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    text: str = ""
    children: list[ElementNode] = field(default_factory=list)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Get an attribute value."""
        return self.attributes.get(name, default)

    def find_all(self, tag: str) -> list[ElementNode]:
        """Direct children with the given tag, in document order."""
        return [child for child in self.children if child.tag == tag]

    def find(self, tag: str) -> ElementNode | None:
        """First direct child with the given tag."""
        for child in self.children:
            if child.tag == tag:
                return child
        return None


@dataclass
class DescriptionAST:
    """Root of a parsed description file."""

    root: ElementNode | None = None

    # File the tree was parsed from (for error messages)
    source_path: str = ""
