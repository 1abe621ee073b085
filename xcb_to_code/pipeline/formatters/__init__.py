"""
Formatters module.

Optional post-processing of generated code.
"""

from __future__ import annotations

from .base import Formatter
from .gofmt_formatter import GofmtFormatter, format_with_gofmt

__all__ = ["Formatter", "GofmtFormatter", "format_with_gofmt"]
