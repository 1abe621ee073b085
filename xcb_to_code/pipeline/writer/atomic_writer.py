"""
Atomic file writer for generated Go code.

Ensures that an interrupted or rejected write never leaves a partially
written output file behind.
"""

from __future__ import annotations

import logging
import re
import tempfile
from collections.abc import Callable
from pathlib import Path

from ..errors import OutputExistsError, OutputValidationError

logger = logging.getLogger(__name__)

_PACKAGE_RE = re.compile(r"^package \w+$", re.MULTILINE)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, validate_go: Callable[[str], None] | None = None):
        """Initialize the atomic writer.

        Args:
            validate_go: Optional validation function for Go code
        """
        self._validate_go = validate_go or self._default_validate_go

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            OutputValidationError: If validation fails
            OSError: If file operations fail
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)

            if validate:
                self.validate(content)

            temp_path.replace(path)
        except Exception:
            temp_path.unlink(missing_ok=True)
            raise

        logger.info("Wrote %s", path)

    def write_if_not_exists(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content only if the file doesn't exist.

        Raises:
            OutputExistsError: If the file already exists
            OutputValidationError: If validation fails
        """
        if path.exists():
            raise OutputExistsError(str(path))

        self.write(path, content, validate)

    def validate(self, content: str) -> None:
        """Run the Go validation on content without writing it.

        Raises:
            OutputValidationError: If validation fails
        """
        self._validate_go(content)

    def _default_validate_go(self, content: str) -> None:
        """Basic structural checks; no Go parser is available here.

        Raises:
            OutputValidationError: If validation fails
        """
        if not _PACKAGE_RE.search(content):
            raise OutputValidationError("Generated Go code is missing a package clause")

        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise OutputValidationError(
                f"Generated Go code has unbalanced braces: {open_braces} open, {close_braces} close"
            )

        open_parens = content.count("(")
        close_parens = content.count(")")
        if open_parens != close_parens:
            raise OutputValidationError(
                f"Generated Go code has unbalanced parentheses: {open_parens} open, {close_parens} close"
            )
