"""
gofmt formatter for Go code.
"""

from __future__ import annotations

import logging
import subprocess

from ..config import FormatterConfig
from .base import Formatter

logger = logging.getLogger(__name__)


class GofmtFormatter(Formatter):
    """Formatter using gofmt for Go code."""

    def __init__(self):
        self._available: dict[str, bool] = {}

    def is_available(self, config: FormatterConfig) -> bool:
        """Check if gofmt is installed."""
        if config.gofmt_path not in self._available:
            try:
                # gofmt has no --version, so format empty input instead
                result = subprocess.run(
                    [config.gofmt_path],
                    input="",
                    capture_output=True,
                    text=True,
                    timeout=5,
                )
                self._available[config.gofmt_path] = result.returncode == 0
            except (subprocess.SubprocessError, OSError):
                self._available[config.gofmt_path] = False
        return self._available[config.gofmt_path]

    def format(self, code: str, config: FormatterConfig) -> str:
        """
        Format Go code using gofmt.

        Args:
            code: Go source code to format
            config: Formatter configuration

        Returns:
            Formatted code, or the input unchanged when gofmt is missing or fails
        """
        if not self.is_available(config):
            logger.warning("%s is not available, leaving generated code unformatted", config.gofmt_path)
            return code

        cmd = [config.gofmt_path]
        if config.simplify:
            cmd.append("-s")

        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=30,
            )
        except subprocess.SubprocessError as e:
            logger.warning("gofmt failed: %s", e)
            return code

        if result.returncode != 0:
            logger.warning("gofmt rejected the generated code: %s", result.stderr.strip())
            return code
        return result.stdout


def format_with_gofmt(code: str, gofmt_path: str = "gofmt", simplify: bool = False) -> str:
    """
    Convenience function to format Go code with gofmt.

    Args:
        code: Go source code
        gofmt_path: gofmt executable
        simplify: Whether to pass -s

    Returns:
        Formatted code
    """
    formatter = GofmtFormatter()
    config = FormatterConfig(enabled=True, gofmt_path=gofmt_path, simplify=simplify)
    return formatter.format(code, config)
