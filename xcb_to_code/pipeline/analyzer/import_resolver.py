"""
Import resolver for <import> declarations.

Loads the description each import names and binds it to the Import
entity. Only the direct imports of the given document are loaded.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..errors import (
    DescriptionMalformedError,
    DescriptionNotFoundError,
    ImportMalformedError,
    ImportNotFoundError,
)
from .builder import load_document
from .entities import Document

logger = logging.getLogger(__name__)


class ImportResolver:
    """Binds imported documents to their Import declarations."""

    FILE_EXTENSION = ".xml"

    def __init__(self, proto_path: Path | str):
        """
        Initialize the resolver.

        Args:
            proto_path: Directory holding the description files
        """
        self.proto_path = Path(proto_path)

    def import_path(self, name: str) -> Path:
        """Path of the description file for an import name."""
        return self.proto_path / f"{name}{self.FILE_EXTENSION}"

    def resolve_imports(self, document: Document) -> None:
        """
        Load and bind every import of a document, in declaration order.

        Imported documents are built but their own imports stay unbound.
        Files are read again on every call.

        Args:
            document: The document whose imports to resolve

        Raises:
            ImportNotFoundError: If an imported file cannot be read
            ImportMalformedError: If an imported file cannot be parsed or built
        """
        for imp in document.imports:
            path = self.import_path(imp.name)
            try:
                imp.document = load_document(path)
            except DescriptionNotFoundError as e:
                raise ImportNotFoundError(imp.name, str(path), e.reason) from e
            except DescriptionMalformedError as e:
                raise ImportMalformedError(imp.name, str(path), str(e)) from e
            logger.info("Resolved import '%s' from %s", imp.name, path)
