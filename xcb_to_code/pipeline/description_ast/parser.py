"""
Protocol description parser that builds an element tree.

Phase 1 of the pipeline: parse the XML markup into neutral element
nodes without interpreting any declaration.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from ..errors import DescriptionMalformedError, DescriptionNotFoundError
from .nodes import DescriptionAST, ElementNode

logger = logging.getLogger(__name__)


class DescriptionParser:
    """Parses protocol description XML into an element tree."""

    def parse(self, text: str | bytes, source_path: str = "") -> DescriptionAST:
        """
        Parse description markup.

        Args:
            text: The XML text, or raw bytes decoded per the XML declaration
            source_path: Path of the file the text came from (for error messages)

        Returns:
            DescriptionAST with the converted root element

        Raises:
            DescriptionMalformedError: If the markup is not well formed
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise DescriptionMalformedError(f"Invalid XML: {e}", source_path) from e

        return DescriptionAST(root=self._convert(root), source_path=source_path)

    def parse_file(self, path: Path | str) -> DescriptionAST:
        """
        Read and parse a description file.

        Raises:
            DescriptionNotFoundError: If the file cannot be read
            DescriptionMalformedError: If the markup is not well formed
        """
        path = Path(path)
        try:
            # Bytes, so that the XML declaration selects the encoding
            text = path.read_bytes()
        except OSError as e:
            raise DescriptionNotFoundError(str(path), e.strerror or str(e)) from e

        logger.debug("Parsing %s", path)
        return self.parse(text, str(path))

    def _convert(self, element: ET.Element) -> ElementNode:
        """Recursively convert an ElementTree element."""
        return ElementNode(
            tag=element.tag,
            attributes=dict(element.attrib),
            text=(element.text or "").strip(),
            children=[self._convert(child) for child in element],
        )
